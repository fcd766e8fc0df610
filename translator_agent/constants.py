"""Shared constants for the translator agent."""

STEP_COST = 5
STEP_UPDATED_EVENT = "step-updated"
UPDATE_ACCEPTED_STATUS = 201
DEFAULT_MODEL = "openai:gpt-4o-mini"
DEFAULT_TARGET_LANGUAGE = "Spanish"
