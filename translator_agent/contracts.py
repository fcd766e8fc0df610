"""Core data contracts exchanged with the step store and event source."""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import STEP_UPDATED_EVENT, UPDATE_ACCEPTED_STATUS


class AgentExecutionStatus(str, Enum):
    """Lifecycle states of a step as persisted by the store."""

    Pending = "Pending"
    In_Progress = "In_Progress"
    Not_Ready = "Not_Ready"
    Completed = "Completed"
    Failed = "Failed"


LogLevel = Literal["info", "warning", "error", "debug"]


class Step(BaseModel):
    """One unit of delegated work.

    Fields the store sends that are not modelled here are kept as extras so
    that an update can write the record back without dropping them.
    """

    model_config = ConfigDict(extra="allow")

    task_id: str
    step_id: str
    did: Optional[str] = None
    step_status: str = AgentExecutionStatus.Pending.value
    input_query: str = ""
    output: Optional[Any] = None
    is_last: bool = False
    cost: Optional[Union[int, float]] = None

    @property
    def store_id(self) -> str:
        """Identifier the store expects on update calls."""
        return self.did or self.step_id

    @property
    def is_pending(self) -> bool:
        return self.step_status == AgentExecutionStatus.Pending.value

    def to_payload(self) -> dict[str, Any]:
        """Serialize the step, extras included, for the store API."""
        return self.model_dump(mode="json")


class StepEvent(BaseModel):
    """Notification that a step may have changed."""

    model_config = ConfigDict(extra="allow")

    step_id: str
    task_id: Optional[str] = None

    @classmethod
    def from_json(cls, data: str | bytes) -> "StepEvent":
        """Deserialize an event from its wire form."""
        return cls.model_validate_json(data)


class TaskLogMessage(BaseModel):
    """Audit record forwarded to the store's task log."""

    task_id: str
    level: LogLevel = "info"
    message: str
    task_status: Optional[AgentExecutionStatus] = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class UpdateResult(BaseModel):
    """Acknowledgment returned by the store for a step update."""

    status_code: int
    data: Any = None

    @property
    def accepted(self) -> bool:
        return self.status_code == UPDATE_ACCEPTED_STATUS


class SubscribeOptions(BaseModel):
    """Which rooms and event types an event source should deliver."""

    join_account_room: bool = False
    join_agent_rooms: List[str] = Field(default_factory=list)
    subscribe_event_types: List[str] = Field(
        default_factory=lambda: [STEP_UPDATED_EVENT]
    )
    get_pending_events_on_subscribe: bool = False

    @classmethod
    def for_agent(cls, agent_did: str) -> "SubscribeOptions":
        """Options used by the agent: its own room, step updates, no replay."""
        return cls(
            join_account_room=False,
            join_agent_rooms=[agent_did],
            subscribe_event_types=[STEP_UPDATED_EVENT],
            get_pending_events_on_subscribe=False,
        )
