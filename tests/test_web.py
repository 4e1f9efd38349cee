"""Tests for the CallCoach HTTP API."""

from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from callcoach.config import Settings
from callcoach.web.app import create_app

from conftest import FakeLLM


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_cors_allows_client_url(self, client):
        response = client.get("/api/health", headers={"Origin": "http://localhost:5173"})
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


class TestScenarios:
    def test_list_seeded(self, client):
        response = client.get("/api/scenarios")
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        ids = [s["id"] for s in data["scenarios"]]
        assert ids == ["angry-callback", "price-shopper", "new-inquiry"]
        assert "Accel Pest & Termite Control" in data["scenarios"][0]["situation"]

    def test_get_unknown(self, client):
        response = client.get("/api/scenarios/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Scenario not found"}

    def test_voices(self, client):
        response = client.get("/api/scenarios/meta/voices")
        assert response.status_code == 200
        voices = response.json()["voices"]
        assert len(voices) == 8
        assert voices[0]["id"] == "11labs-Adrian"

    def test_create_requires_fields(self, client):
        response = client.post("/api/scenarios", json={"name": "No prompt"})
        assert response.status_code == 400
        assert response.json() == {"error": "Name and system prompt are required"}

    def test_create_rejects_non_object_body(self, client):
        response = client.post("/api/scenarios", json=[1, 2])
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_crud_flow(self, client):
        response = client.post("/api/scenarios", json={
            "name": "Test",
            "systemPrompt": "You are calling {{company.name}}.",
            "difficulty": "Easy",
        })
        assert response.status_code == 200
        created = response.json()["scenario"]
        scenario_id = created["id"]
        assert scenario_id.startswith("custom-")

        listed = client.get("/api/scenarios").json()["scenarios"]
        match = [s for s in listed if s["id"] == scenario_id]
        assert len(match) == 1
        assert match[0]["isCustom"] is True

        response = client.put(f"/api/scenarios/{scenario_id}", json={"name": "Renamed"})
        assert response.status_code == 200
        updated = response.json()["scenario"]
        assert updated["name"] == "Renamed"
        assert updated["difficulty"] == "Easy"
        assert "updatedAt" in updated

        response = client.delete(f"/api/scenarios/{scenario_id}")
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Scenario deleted"}

        response = client.get(f"/api/scenarios/{scenario_id}")
        assert response.status_code == 404

    def test_update_unknown(self, client):
        response = client.put("/api/scenarios/nope", json={"name": "x"})
        assert response.status_code == 404

    def test_delete_unknown(self, client):
        response = client.delete("/api/scenarios/nope")
        assert response.status_code == 404


class TestCalls:
    def test_create_requires_scenario(self, client):
        response = client.post("/api/calls/create-training-call", json={"scenarioId": "x"})
        assert response.status_code == 400
        assert response.json() == {"error": "Scenario is required"}

    def test_call_lifecycle(self, client, retell_api):
        scenario = client.get("/api/scenarios/angry-callback").json()["scenario"]

        response = client.post("/api/calls/create-training-call", json={
            "scenarioId": "angry-callback",
            "scenario": scenario,
        })
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "callId": "call_1",
            "agentId": "agent_1",
            "accessToken": "token_1",
            "sampleRate": 24000,
        }

        status = client.get("/api/calls/status/call_1").json()
        assert status["callInfo"]["scenarioId"] == "angry-callback"
        assert status["callInfo"]["agentId"] == "agent_1"

        response = client.post("/api/calls/end", json={"callId": "call_1"})
        assert response.status_code == 200
        ended = response.json()
        assert ended["callId"] == "call_1"
        assert ended["callInfo"]["scenarioId"] == "angry-callback"
        assert ended["transcript"]["formatted"][0]["role"] == "customer"

        response = client.get("/api/calls/status/call_1")
        assert response.status_code == 404
        assert response.json() == {"error": "Call not found"}

    def test_end_requires_call_id(self, client):
        response = client.post("/api/calls/end", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "Call ID is required"}

    def test_transcript(self, client):
        response = client.get("/api/calls/transcript/call_1")
        assert response.status_code == 200
        transcript = response.json()["transcript"]
        assert transcript["duration"] == 95
        assert [line["role"] for line in transcript["formatted"]] == ["customer", "csr"]

    def test_provider_failure(self, client, retell_api):
        retell_api.fail_paths.add("/create-agent")
        response = client.post("/api/calls/create-training-call", json={"scenario": {"name": "x"}})
        assert response.status_code == 500
        error = response.json()["error"]
        assert "Retell API error 500" in error
        assert "stack" not in response.json()


class TestAnalysis:
    def test_analyze_requires_transcript(self, client):
        response = client.post("/api/analysis/analyze", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "Transcript is required"}

    def test_analyze(self, client, fake_llm):
        fake_llm.replies.append(json.dumps({"overallScore": 81}))
        response = client.post("/api/analysis/analyze", json={
            "transcript": "Agent: hi\nUser: hello",
            "scenario": {"name": "Price Shopper"},
            "callDuration": 60,
        })
        assert response.status_code == 200
        assert response.json() == {"success": True, "analysis": {"overallScore": 81}}

        user_prompt = fake_llm.calls[0]["user"]
        assert "- Scenario: Price Shopper" in user_prompt
        assert "- Company: Accel Pest & Termite Control" in user_prompt
        assert "- Call Duration: 60 seconds" in user_prompt

    def test_analyze_parse_error_is_not_http_error(self, client, fake_llm):
        fake_llm.replies.append("not json")
        response = client.post("/api/analysis/analyze", json={"transcript": "x"})
        assert response.status_code == 200
        assert response.json()["analysis"] == {"raw": "not json", "parseError": True}

    def test_sentiment(self, client, fake_llm):
        fake_llm.replies.append('```json\n{"sentiment": "angry", "confidence": 0.7, "escalationRisk": "high"}\n```')
        response = client.post("/api/analysis/sentiment", json={"text": "This is the third time!"})
        assert response.json() == {"success": True, "sentiment": "angry", "confidence": 0.7}

    def test_sentiment_unparseable(self, client, fake_llm):
        fake_llm.replies.append("hmm")
        response = client.post("/api/analysis/sentiment", json={"text": "ok"})
        assert response.json() == {"success": True, "sentiment": None, "confidence": None}

    def test_sentiment_requires_text(self, client):
        response = client.post("/api/analysis/sentiment", json={"text": ""})
        assert response.status_code == 400
        assert response.json() == {"error": "Text is required"}

    def test_llm_failure(self, client, fake_llm):
        fake_llm.replies.append(RuntimeError("rate limited"))
        response = client.post("/api/analysis/analyze", json={"transcript": "x"})
        assert response.status_code == 500
        assert response.json()["error"] == "rate limited"


class TestAdmin:
    def test_current_config(self, client):
        config = client.get("/api/admin/current-config").json()
        assert config["company"]["name"] == "Accel Pest & Termite Control"
        assert config["settings"]["callTimeout"] == 600000

    def test_apply_company(self, client):
        response = client.post("/api/admin/apply-company", json={
            "companyData": {"name": "Bug Busters", "serviceAreas": ["Tucson"]},
        })
        assert response.status_code == 200
        company = response.json()["config"]
        assert company["name"] == "Bug Busters"
        assert company["serviceAreas"] == ["Tucson"]

        scenario = client.get("/api/scenarios/angry-callback").json()["scenario"]
        assert "Bug Busters" in scenario["situation"]
        assert "Tucson" in scenario["customerBackground"]

    def test_apply_company_requires_data(self, client):
        response = client.post("/api/admin/apply-company", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "Company data is required"}

    def test_update_and_reset_config(self, client):
        response = client.post("/api/admin/update-config", json={"settings": {"defaultVoiceId": "11labs-Lily"}})
        config = response.json()["config"]
        assert config["settings"]["defaultVoiceId"] == "11labs-Lily"
        assert config["settings"]["callTimeout"] == 600000

        response = client.post("/api/admin/reset-config")
        assert response.json()["config"]["settings"]["defaultVoiceId"] == "11labs-Adrian"

    def test_update_null_section_keeps_company(self, client):
        response = client.post("/api/admin/update-config", json={"company": None})
        assert response.status_code == 200

        config = client.get("/api/admin/current-config").json()
        assert config["company"]["name"] == "Accel Pest & Termite Control"
        scenario = client.get("/api/scenarios/angry-callback").json()["scenario"]
        assert "{{company" not in scenario["situation"]

    def test_load_transcript(self, client, fake_llm):
        fake_llm.replies.append('{"companies": [{"name": "Terminix"}], "commonObjections": ["price"]}')
        response = client.post("/api/admin/load-transcript", json={"transcript": "Agent: We use Terminix."})
        assert response.status_code == 200
        assert response.json()["intelligence"]["companies"][0]["name"] == "Terminix"
        assert "Agent: We use Terminix." in fake_llm.calls[0]["user"]

    def test_load_transcript_requires_text(self, client):
        response = client.post("/api/admin/load-transcript", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "Transcript is required"}

    def test_scrape_requires_url(self, client):
        response = client.post("/api/admin/scrape-company", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

    def test_scrape_company(self, settings, retell_client, fake_llm):
        def handler(request):
            if request.url.path == "/":
                return httpx.Response(200, text="<html><head><title>Bug Busters</title></head><main>Ants</main></html>")
            return httpx.Response(404)

        fake_llm.replies.append('{"name": "Bug Busters"}')
        app = create_app(
            settings,
            llm_client=fake_llm,
            voice_client=retell_client,
            scrape_http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )

        response = TestClient(app).post("/api/admin/scrape-company", json={"url": "bugbusters.com"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["url"] == "https://bugbusters.com"
        assert data["metadata"]["title"] == "Bug Busters"
        assert data["extracted"] == {"name": "Bug Busters"}

    def test_scrape_failure(self, settings, retell_client, fake_llm):
        app = create_app(
            settings,
            llm_client=fake_llm,
            voice_client=retell_client,
            scrape_http_client=httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(503))),
        )
        response = TestClient(app).post("/api/admin/scrape-company", json={"url": "https://down.example"})
        assert response.status_code == 500
        assert response.json()["error"].startswith("Failed to scrape website")


class TestMissingApiKey:
    def test_analysis_without_key(self, settings, retell_client, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        app = create_app(settings, voice_client=retell_client)

        response = TestClient(app).post("/api/analysis/sentiment", json={"text": "hello"})

        assert response.status_code == 500
        assert response.json()["error"] == "ANTHROPIC_API_KEY environment variable not set"


class TestDevelopmentErrors:
    @pytest.fixture
    def dev_client(self, tmp_path, retell_client):
        settings = Settings(data_dir=tmp_path / "data", env="development")
        llm = FakeLLM([RuntimeError("boom")])
        return TestClient(create_app(settings, llm_client=llm, voice_client=retell_client))

    def test_stack_included_in_development(self, dev_client):
        response = dev_client.post("/api/analysis/sentiment", json={"text": "x"})
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "boom"
        assert "Traceback" in body["stack"]

    def test_client_errors_have_no_stack(self, dev_client):
        response = dev_client.get("/api/scenarios/nope")
        assert "stack" not in response.json()

    def test_unset_env_has_no_stack(self, tmp_path, retell_client, monkeypatch):
        monkeypatch.delenv("CALLCOACH_ENV", raising=False)
        settings = Settings.from_env(tmp_path / "data")
        app = create_app(settings, llm_client=FakeLLM([RuntimeError("boom")]), voice_client=retell_client)

        response = TestClient(app).post("/api/analysis/sentiment", json={"text": "x"})

        assert response.status_code == 500
        assert response.json() == {"error": "boom"}
