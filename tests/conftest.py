"""Shared test fixtures for CallCoach."""

from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from callcoach.calls import TranscriptWaitPolicy
from callcoach.config import Settings
from callcoach.llm.client import LLMResponse
from callcoach.storage.config_store import ConfigStore
from callcoach.storage.scenarios import ScenarioRepository
from callcoach.storage.sessions import InMemoryCallSessionStore
from callcoach.voice.retell import RetellClient

SAMPLE_TRANSCRIPT = (
    "Agent: Yeah, hi, the ants are back in my kitchen.\n"
    "User: I'm so sorry about that, let me get a technician out to you."
)


class FakeLLM:
    """Stands in for AnthropicAPIClient; replays canned replies in order."""

    def __init__(self, replies=None, default_reply="{}"):
        self.replies = list(replies or [])
        self.default_reply = default_reply
        self.calls = []

    def complete(self, system, user, max_tokens=4096):
        self.calls.append({"system": system, "user": user, "max_tokens": max_tokens})
        reply = self.replies.pop(0) if self.replies else self.default_reply
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(content=reply, input_tokens=10, output_tokens=20, model="fake-model")


class FakeRetellAPI:
    """In-memory Retell API served through httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.transcript = SAMPLE_TRANSCRIPT
        self.empty_transcript_polls = 0
        self.fail_paths: set[str] = set()
        self._get_call_count = 0

    @property
    def paths(self) -> list[str]:
        return [path for _, path, _ in self.requests]

    def body_for(self, path: str):
        for _, p, body in self.requests:
            if p == path:
                return body
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, path, body))

        if path in self.fail_paths:
            return httpx.Response(500, text="upstream exploded")

        if path == "/create-retell-llm":
            return httpx.Response(201, json={"llm_id": "llm_1"})
        if path == "/create-agent":
            return httpx.Response(201, json={"agent_id": "agent_1", "agent_name": body["agent_name"]})
        if path.startswith("/delete-agent/"):
            return httpx.Response(204)
        if path == "/list-voices":
            return httpx.Response(200, json=[
                {"voice_id": "11labs-Adrian", "voice_name": "Adrian", "gender": "male"},
                {"voice_id": "11labs-Myra", "voice_name": "Myra", "gender": "female"},
            ])
        if path == "/v2/create-web-call":
            return httpx.Response(201, json={
                "call_id": "call_1",
                "access_token": "token_1",
                "agent_id": body["agent_id"],
            })
        if path == "/v2/end-call":
            return httpx.Response(200)
        if path.startswith("/v2/get-call/"):
            self._get_call_count += 1
            ready = self._get_call_count > self.empty_transcript_polls
            return httpx.Response(200, json={
                "call_id": path.rsplit("/", 1)[-1],
                "transcript": self.transcript if ready else "",
                "start_timestamp": 1700000000000,
                "end_timestamp": 1700000095000,
                "call_status": "ended",
                "disconnection_reason": "user_hangup",
            })

        return httpx.Response(404, text="not found")


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at an empty temp data directory."""
    return Settings(
        data_dir=tmp_path / "data",
        anthropic_api_key=None,
        retell_api_key="test-retell-key",
        env="test",
    )


@pytest.fixture
def config_store(settings):
    return ConfigStore(settings.config_path)


@pytest.fixture
def scenario_repo(settings, config_store):
    return ScenarioRepository(settings.scenarios_path, config_store)


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def retell_api():
    return FakeRetellAPI()


@pytest.fixture
def retell_client(retell_api):
    """RetellClient whose HTTP traffic goes to FakeRetellAPI."""
    http = httpx.Client(transport=httpx.MockTransport(retell_api.handler))
    client = RetellClient("test-retell-key", http_client=http)
    yield client
    client.close()


@pytest.fixture
def sessions():
    return InMemoryCallSessionStore()


@pytest.fixture
def no_wait():
    """Transcript polling without real delays."""
    return TranscriptWaitPolicy(attempts=3, initial_delay=0, backoff=1)


@pytest.fixture
def app(settings, fake_llm, retell_client, sessions, no_wait):
    from callcoach.web.app import create_app

    return create_app(
        settings,
        llm_client=fake_llm,
        voice_client=retell_client,
        sessions=sessions,
        wait_policy=no_wait,
    )


@pytest.fixture
def client(app):
    """Test client for the API."""
    return TestClient(app)
