import asyncio

import pytest

from translator_agent.contracts import AgentExecutionStatus, Step
from translator_agent.exceptions import BackendError
from translator_agent.store import InMemoryStepStore


class FakeTranslator:
    """Stands in for the LLM-backed translator."""

    def __init__(self, output: str = "Hola", error: Exception | None = None):
        self.output = output
        self.error = error
        self.calls: list[str] = []
        self.release: asyncio.Event | None = None

    async def translate(self, text: str) -> str:
        self.calls.append(text)
        if self.release is not None:
            await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.output


class SpyStepStore(InMemoryStepStore):
    """In-memory store that counts reads."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fetched: list[str] = []

    async def get_step(self, step_id: str) -> Step:
        self.fetched.append(step_id)
        return await super().get_step(step_id)


def make_step(status: str = AgentExecutionStatus.Pending.value, **kwargs) -> Step:
    data = {
        "task_id": "task-1",
        "step_id": "s1",
        "did": "did:step:s1",
        "step_status": status,
        "input_query": "Hello",
    }
    data.update(kwargs)
    return Step(**data)


@pytest.fixture
def pending_step() -> Step:
    return make_step()


@pytest.fixture
def store(pending_step) -> SpyStepStore:
    return SpyStepStore([pending_step])


@pytest.fixture
def translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture
def failing_translator() -> FakeTranslator:
    return FakeTranslator(error=BackendError("model unavailable"))
