from __future__ import annotations

import pytest
import requests
from fastapi.testclient import TestClient

from agent_conductor.config import Settings
from agent_conductor.core.errors import ProviderError
from agent_conductor.llm import assistants
from agent_conductor.llm.assistants import AssistantsClient, create_assistants_client
from agent_conductor.llm.base import LLMError
from agent_conductor.server import create_app

from .conftest import FakeResponse, ScriptedProvider

BASE_URL = "https://api.openai.com/v1"


class FakeAssistantsApi:
    """Stands in for ``requests.request``; answers from ``routes`` keyed by (method, path)."""

    def __init__(self, routes):
        self.routes = {key: list(value) if isinstance(value, list) else value for key, value in routes.items()}
        self.requests = []

    def __call__(self, method, url, json=None, params=None, headers=None, timeout=None):
        path = url[len(BASE_URL) + 1 :]
        self.requests.append({"method": method, "path": path, "json": json, "params": params, "headers": headers})
        answer = self.routes[(method, path)]
        if isinstance(answer, list):
            answer = answer.pop(0) if len(answer) > 1 else answer[0]
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, FakeResponse):
            return answer
        return FakeResponse(body=answer)

    def paths(self):
        return [(r["method"], r["path"]) for r in self.requests]


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(assistants.time, "sleep", recorded.append)
    return recorded


@pytest.fixture
def client():
    return AssistantsClient(base_url=BASE_URL, api_key="sk-test", poll_interval=2.0, run_timeout=30.0)


def _install(monkeypatch, routes):
    api = FakeAssistantsApi(routes)
    monkeypatch.setattr(assistants.requests, "request", api)
    return api


def _thread_routes(run_statuses, messages=None):
    runs = [{"id": "run_1", "status": status} for status in run_statuses]
    return {
        ("POST", "threads/t1/messages"): {"id": "msg_1"},
        ("POST", "threads/t1/runs"): runs[0],
        ("GET", "threads/t1/runs/run_1"): runs[1:] or runs,
        ("GET", "threads/t1/messages"): {"data": messages or []},
    }


def test_existing_assistant_is_reused(monkeypatch, client):
    api = _install(
        monkeypatch,
        {("GET", "assistants"): {"data": [{"id": "asst_0", "name": "Other"}, {"id": "asst_1", "name": "Tutor"}]}},
    )

    assert client.get_or_create_assistant("Tutor", "Be kind", "gpt-4o-mini") == ("asst_1", False)
    assert api.paths() == [("GET", "assistants")]
    assert api.requests[0]["headers"]["OpenAI-Beta"] == "assistants=v2"
    assert api.requests[0]["headers"]["Authorization"] == "Bearer sk-test"


def test_missing_assistant_is_created(monkeypatch, client):
    api = _install(
        monkeypatch,
        {("GET", "assistants"): {"data": []}, ("POST", "assistants"): {"id": "asst_new"}},
    )

    assert client.get_or_create_assistant("Tutor", "Be kind", "gpt-4o-mini") == ("asst_new", True)
    assert api.requests[-1]["json"] == {"name": "Tutor", "instructions": "Be kind", "model": "gpt-4o-mini"}


def test_find_follows_pagination(monkeypatch, client):
    pages = [
        {"data": [{"id": "asst_1", "name": "A"}], "has_more": True},
        {"data": [{"id": "asst_2", "name": "B"}], "has_more": False},
    ]
    api = _install(monkeypatch, {("GET", "assistants"): pages})

    assert client.find_assistant_by_name("B") == "asst_2"
    assert api.requests[1]["params"] == {"limit": 100, "after": "asst_1"}


def test_run_and_wait_polls_until_completed(monkeypatch, client, sleeps):
    messages = [{"id": "msg_2", "role": "assistant", "content": [{"type": "text", "text": {"value": "hello"}}]}]
    api = _install(monkeypatch, _thread_routes(["queued", "in_progress", "completed"], messages))

    assert client.run_and_wait("t1", "asst_1", "hi") == messages
    assert sleeps == [2.0, 2.0]
    assert api.requests[0]["json"] == {"role": "user", "content": "hi"}
    assert api.requests[1]["json"] == {"assistant_id": "asst_1"}
    assert api.paths()[-1] == ("GET", "threads/t1/messages")


@pytest.mark.parametrize("status", ["failed", "expired", "cancelled", "requires_action"])
def test_failed_run_raises(monkeypatch, client, sleeps, status):
    _install(monkeypatch, _thread_routes(["queued", status]))
    with pytest.raises(LLMError, match=status):
        client.run_and_wait("t1", "asst_1", "hi")


def test_run_gives_up_after_timeout(monkeypatch, client, sleeps):
    ticks = [0.0, 10.0, 20.0, 31.0]
    monkeypatch.setattr(assistants.time, "monotonic", lambda: ticks.pop(0) if len(ticks) > 1 else ticks[0])
    _install(monkeypatch, _thread_routes(["queued", "in_progress"]))

    with pytest.raises(LLMError, match="did not complete"):
        client.run_and_wait("t1", "asst_1", "hi")
    assert len(sleeps) == 2


@pytest.mark.parametrize(
    "answer",
    [
        FakeResponse(status_code=401, text="bad key"),
        FakeResponse(body=None, text="<html>"),
        FakeResponse(body={"object": "thread"}),
        requests.ConnectionError("refused"),
    ],
)
def test_create_thread_failures_raise_llm_error(monkeypatch, client, answer):
    _install(monkeypatch, {("POST", "threads"): answer})
    with pytest.raises(LLMError) as excinfo:
        client.create_thread()
    assert isinstance(excinfo.value, ProviderError)


@pytest.mark.parametrize("kwargs", [{"poll_interval": 0}, {"run_timeout": -1}])
def test_polling_bounds_must_be_positive(kwargs):
    with pytest.raises(ValueError):
        AssistantsClient(base_url=BASE_URL, api_key="sk-test", **kwargs)


def test_factory_uses_openai_provider_settings(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://proxy.test/v1/")
    monkeypatch.setenv("OPENAI_ORG_ID", "org-1")

    client = create_assistants_client()

    assert client.base_url == "https://proxy.test/v1"
    assert client.headers["OpenAI-Organization"] == "org-1"
    assert client.headers["Authorization"] == "Bearer sk-env"


# HTTP routes


@pytest.fixture
def http(client):
    app = create_app(provider=ScriptedProvider(), settings=Settings(), assistants=client)
    return TestClient(app)


def test_assistant_route_creates_then_finds(monkeypatch, http):
    _install(
        monkeypatch,
        {
            ("GET", "assistants"): [{"data": []}, {"data": [{"id": "asst_new", "name": "Tutor"}]}],
            ("POST", "assistants"): {"id": "asst_new"},
        },
    )
    body = {"assistantName": "Tutor", "systemMessage": "Be kind", "model": "gpt-4o-mini"}

    first = http.post("/assistant", json=body)
    second = http.post("/assistant", json=body)

    assert first.json() == {"assistantId": "asst_new", "status": "Assistant created successfully"}
    assert second.json() == {"assistantId": "asst_new", "status": "Assistant found"}


def test_assistant_route_defaults_model(monkeypatch, http):
    api = _install(monkeypatch, {("GET", "assistants"): {"data": []}, ("POST", "assistants"): {"id": "a"}})
    http.post("/assistant", json={"assistantName": "Tutor"})
    assert api.requests[-1]["json"]["model"] == "gpt-4o-mini"


def test_assistant_route_requires_name(http):
    response = http.post("/assistant", json={"model": "gpt-4o-mini"})
    assert response.status_code == 400
    assert response.json() == {"error": "assistantName is required"}


def test_thread_route(monkeypatch, http):
    _install(monkeypatch, {("POST", "threads"): {"id": "thread_1"}})
    assert http.post("/thread").json() == {"threadId": "thread_1", "status": "New thread created"}


def test_thread_route_failure_is_500(monkeypatch, http):
    _install(monkeypatch, {("POST", "threads"): FakeResponse(status_code=503, text="busy")})
    response = http.post("/thread")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create thread"}


def test_run_route_requires_an_assistant(http):
    response = http.post("/run", json={"threadId": "t1", "userPrompt": "hi"})
    assert response.status_code == 400
    assert response.json() == {"error": "No Assistant has been created yet."}


def test_run_route_returns_thread_messages(monkeypatch, http, sleeps):
    messages = [{"id": "msg_2", "role": "assistant"}]
    routes = _thread_routes(["queued", "completed"], messages)
    routes[("GET", "assistants")] = {"data": [{"id": "asst_1", "name": "Tutor"}]}
    _install(monkeypatch, routes)
    http.post("/assistant", json={"assistantName": "Tutor"})

    response = http.post("/run", json={"threadId": "t1", "userPrompt": "hi"})

    assert response.status_code == 200
    assert response.json() == {"messages": messages, "status": "Response received from Assistant"}


def test_run_route_failure_is_500(monkeypatch, http, sleeps):
    routes = _thread_routes(["queued", "failed"])
    routes[("GET", "assistants")] = {"data": [{"id": "asst_1", "name": "Tutor"}]}
    _install(monkeypatch, routes)
    http.post("/assistant", json={"assistantName": "Tutor"})

    response = http.post("/run", json={"threadId": "t1", "userPrompt": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to run Assistant"}


def test_routes_without_client_are_500():
    http = TestClient(create_app(provider=ScriptedProvider()))
    response = http.post("/thread")
    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong."}
