"""Step store tests."""

import json

import httpx
import pytest

from translator_agent.config import AgentConfig, StoreConfig
from translator_agent.contracts import AgentExecutionStatus, Step, TaskLogMessage
from translator_agent.exceptions import BootstrapError
from translator_agent.store import HttpStepStore, InMemoryStepStore, get_step_store

STEP_JSON = {
    "task_id": "task-1",
    "step_id": "s1",
    "did": "did:step:s1",
    "step_status": "Pending",
    "input_query": "Hello",
    "name": "translate",
}


def http_store(handler, api_key: str = "nvm-key") -> HttpStepStore:
    client = httpx.AsyncClient(
        base_url="https://steps.test", transport=httpx.MockTransport(handler)
    )
    return HttpStepStore("https://steps.test", api_key, client=client)


@pytest.mark.asyncio
async def test_inmemory_store_update_and_logs():
    store = InMemoryStepStore([Step(**STEP_JSON)])

    step = await store.get_step("s1")
    step.step_status = AgentExecutionStatus.Completed.value
    result = await store.update_step("did:step:s1", step)
    await store.log_task(TaskLogMessage(task_id="task-1", message="done"))

    assert result.accepted
    assert (await store.get_step("s1")).step_status == "Completed"
    assert [entry.message for entry in store.logs] == ["done"]


@pytest.mark.asyncio
async def test_inmemory_store_returns_copies():
    store = InMemoryStepStore([Step(**STEP_JSON)])

    step = await store.get_step("s1")
    step.output = "mutated"

    assert (await store.get_step("s1")).output is None


@pytest.mark.asyncio
async def test_inmemory_store_unknown_step():
    store = InMemoryStepStore()

    with pytest.raises(LookupError):
        await store.get_step("nope")
    result = await store.update_step("nope", Step(**STEP_JSON))
    assert result.status_code == 404


@pytest.mark.asyncio
async def test_http_store_connect_checks_credentials():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["path"] = request.url.path
        return httpx.Response(200, json={"id": "account-1"})

    store = http_store(handler)
    await store.connect()

    assert seen == {"auth": "Bearer nvm-key", "path": "/api/v1/auth/me"}


@pytest.mark.asyncio
async def test_http_store_rejected_login():
    store = http_store(lambda request: httpx.Response(401, json={"error": "bad key"}))

    with pytest.raises(BootstrapError, match="401"):
        await store.connect()


@pytest.mark.asyncio
async def test_http_store_requires_api_key():
    store = http_store(lambda request: httpx.Response(200), api_key="")

    with pytest.raises(BootstrapError):
        await store.connect()


@pytest.mark.asyncio
async def test_http_store_get_step():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/agents/steps/s1"
        return httpx.Response(200, json=STEP_JSON)

    step = await http_store(handler).get_step("s1")

    assert step.input_query == "Hello"
    assert step.store_id == "did:step:s1"


@pytest.mark.asyncio
async def test_http_store_get_step_not_found():
    store = http_store(lambda request: httpx.Response(404))

    with pytest.raises(httpx.HTTPStatusError):
        await store.get_step("s1")


@pytest.mark.asyncio
async def test_http_store_update_step_reports_status():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(201, json={"ok": True})

    step = Step(**STEP_JSON).model_copy(update={"output": "Hola", "cost": 5})
    result = await http_store(handler).update_step("did:step:s1", step)

    assert result.accepted
    assert result.data == {"ok": True}
    assert requests[0].method == "PUT"
    assert requests[0].url.path == "/api/v1/agents/steps/did:step:s1"
    body = json.loads(requests[0].content)
    assert body["output"] == "Hola"
    assert body["name"] == "translate"


@pytest.mark.asyncio
async def test_http_store_update_step_rejection_keeps_text_body():
    store = http_store(lambda request: httpx.Response(409, text="conflict"))

    result = await store.update_step("s1", Step(**STEP_JSON))

    assert not result.accepted
    assert result.data == "conflict"


@pytest.mark.asyncio
async def test_http_store_log_task():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(201)

    entry = TaskLogMessage(
        task_id="task-1",
        level="info",
        message="Translation completed.",
        task_status=AgentExecutionStatus.Completed,
    )
    await http_store(handler).log_task(entry)

    assert requests[0].url.path == "/api/v1/agents/tasks/task-1/log"
    assert json.loads(requests[0].content) == {
        "task_id": "task-1",
        "level": "info",
        "message": "Translation completed.",
        "task_status": "Completed",
    }


def test_get_step_store_backends():
    config = AgentConfig(
        store=StoreConfig(
            backend="http",
            environment="local",
            api_key="nvm-key",
        )
    )

    assert isinstance(get_step_store(config=config), HttpStepStore)
    assert isinstance(get_step_store("inmemory", config=config), InMemoryStepStore)
    with pytest.raises(ValueError):
        get_step_store("sqlite", config=config)
