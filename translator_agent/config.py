from __future__ import annotations

import os
from typing import Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, SecretStr

from .constants import DEFAULT_MODEL, DEFAULT_TARGET_LANGUAGE


class RedisConfig(BaseModel):
    """Configuration for the Redis event source."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    prefix: str = "translator-agent"


class EventsConfig(BaseModel):
    """Event source configuration settings."""

    backend: Literal["inmemory", "redis"] = "inmemory"
    redis: RedisConfig = RedisConfig()


class StoreConfig(BaseModel):
    """Step store configuration settings."""

    backend: Literal["inmemory", "http"] = "inmemory"
    environment: str = "local"
    environments: Dict[str, str] = Field(
        default_factory=lambda: {"local": "http://localhost:3001"}
    )
    api_key: Optional[SecretStr] = None
    timeout: float = 30.0

    @property
    def base_url(self) -> str:
        try:
            return self.environments[self.environment]
        except KeyError:
            raise ValueError(
                f"No base URL configured for environment: {self.environment}"
            ) from None


class TranslationConfig(BaseModel):
    """Translation backend settings."""

    model: str = DEFAULT_MODEL
    target_language: str = DEFAULT_TARGET_LANGUAGE
    api_key: Optional[SecretStr] = None


class ProcessorConfig(BaseModel):
    """Step processing policy."""

    mark_failed_on_translation_error: bool = False


class AgentConfig(BaseModel):
    """Top-level configuration model."""

    agent_did: Optional[str] = None
    log_level: str = "info"
    store: StoreConfig = StoreConfig()
    events: EventsConfig = EventsConfig()
    translation: TranslationConfig = TranslationConfig()
    processor: ProcessorConfig = ProcessorConfig()


def load_config(path: Optional[str] = None) -> AgentConfig:
    """Load configuration from YAML file and the environment.

    Args:
        path: Optional path to config file. Falls back to TRANSLATOR_AGENT_CONFIG
            env variable or 'config.yaml' in the current directory.
    """

    config_path = path or os.getenv("TRANSLATOR_AGENT_CONFIG", "config.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = AgentConfig(**data)
    else:
        config = AgentConfig()

    if os.getenv("AGENT_DID"):
        config.agent_did = os.environ["AGENT_DID"]
    if os.getenv("NVM_API_KEY"):
        config.store.api_key = SecretStr(os.environ["NVM_API_KEY"])
    if os.getenv("NVM_ENVIRONMENT"):
        config.store.environment = os.environ["NVM_ENVIRONMENT"]
    if os.getenv("OPENAI_API_KEY"):
        config.translation.api_key = SecretStr(os.environ["OPENAI_API_KEY"])
    if os.getenv("TRANSLATOR_AGENT_MODEL"):
        config.translation.model = os.environ["TRANSLATOR_AGENT_MODEL"]
    if os.getenv("TRANSLATOR_AGENT_STORE"):
        config.store.backend = os.environ["TRANSLATOR_AGENT_STORE"].lower()
    if os.getenv("TRANSLATOR_AGENT_EVENTS"):
        config.events.backend = os.environ["TRANSLATOR_AGENT_EVENTS"].lower()
    return config
