"""Translator agent: translates pending task steps delivered as events."""

from .config import AgentConfig, load_config
from .contracts import (
    AgentExecutionStatus,
    Step,
    StepEvent,
    SubscribeOptions,
    TaskLogMessage,
    UpdateResult,
)
from .events import get_event_source
from .processor import StepProcessor
from .runtime import AgentRuntime
from .store import get_step_store
from .translation import Translator

__version__ = "0.1.0"
__all__ = [
    "AgentConfig",
    "AgentExecutionStatus",
    "AgentRuntime",
    "Step",
    "StepEvent",
    "StepProcessor",
    "SubscribeOptions",
    "TaskLogMessage",
    "Translator",
    "UpdateResult",
    "get_event_source",
    "get_step_store",
    "load_config",
]
