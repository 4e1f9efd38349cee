"""Training-call lifecycle: scenario -> remote agent + web call -> transcript."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from callcoach.analysis.prompts import build_agent_prompt
from callcoach.config import DEFAULT_SAMPLE_RATE, DEFAULT_VOICE_ID
from callcoach.errors import NotFoundError, ValidationError
from callcoach.storage.config_store import ConfigStore
from callcoach.storage.models import CallSession, Transcript
from callcoach.storage.sessions import CallSessionStore
from callcoach.templating import render_template

logger = logging.getLogger(__name__)

CALL_TEMPLATE_FIELDS = ("systemPrompt", "customerBackground", "situation")
DEFAULT_OPENING_LINE = "Hello?"


@dataclass
class TranscriptWaitPolicy:
    attempts: int = 5
    initial_delay: float = 1.0
    backoff: float = 2.0


class TrainingCallService:
    def __init__(
        self,
        config_store: ConfigStore,
        voice_client,
        sessions: CallSessionStore,
        wait_policy: TranscriptWaitPolicy | None = None,
    ):
        self.config_store = config_store
        self.voice_client = voice_client
        self.sessions = sessions
        self.wait_policy = wait_policy or TranscriptWaitPolicy()

    def create_training_call(self, scenario_id: str | None, scenario: dict | None) -> dict:
        """Provision a customer agent for `scenario` and open a web call."""
        if not scenario:
            raise ValidationError("Scenario is required")

        config = self.config_store.load()
        company = config.get("company") or {}
        settings = config.get("settings") or {}

        context = {"company": company}
        resolved = dict(scenario)
        for key in CALL_TEMPLATE_FIELDS:
            if key in resolved:
                result = render_template(resolved[key], context)
                if result.unresolved_paths:
                    logger.warning(
                        f"Scenario {key} has unresolved placeholders: {', '.join(result.unresolved_paths)}"
                    )
                resolved[key] = result.resolved

        prompt = build_agent_prompt(resolved, company)
        name = resolved.get("name") or "Scenario"
        logger.info(f"Creating Retell agent for scenario: {name}")

        agent = self.voice_client.create_agent(
            name=f"CSR Training - {name}",
            prompt=prompt,
            voice_id=scenario.get("voiceId") or settings.get("defaultVoiceId") or DEFAULT_VOICE_ID,
            first_message=resolved.get("openingLine") or DEFAULT_OPENING_LINE,
        )
        web_call = self.voice_client.create_web_call(agent["agent_id"])

        self.sessions.set(CallSession(
            call_id=web_call["call_id"],
            agent_id=agent["agent_id"],
            llm_id=agent.get("llm_id"),
            scenario_id=scenario_id,
            scenario=resolved,
            company=company,
            start_time=datetime.now(timezone.utc).isoformat(),
        ))

        return {
            "callId": web_call["call_id"],
            "agentId": agent["agent_id"],
            "accessToken": web_call.get("access_token"),
            "sampleRate": web_call.get("sample_rate") or DEFAULT_SAMPLE_RATE,
        }

    def end_training_call(self, call_id: str | None) -> dict:
        """End the remote call, wait for its transcript and drop the session.

        An unknown or already-ended call ID is not an error; callInfo is None.
        """
        if not call_id:
            raise ValidationError("Call ID is required")

        session = self.sessions.get(call_id)
        self.voice_client.end_call(call_id)

        policy = self.wait_policy
        transcript = self.voice_client.wait_for_transcript(
            call_id,
            attempts=policy.attempts,
            initial_delay=policy.initial_delay,
            backoff=policy.backoff,
        )
        self.sessions.delete(call_id)

        return {
            "callId": call_id,
            "transcript": transcript.to_dict(),
            "callInfo": session.to_dict() if session else None,
        }

    def get_status(self, call_id: str) -> CallSession:
        session = self.sessions.get(call_id)
        if session is None:
            raise NotFoundError("Call not found")
        return session

    def get_transcript(self, call_id: str) -> Transcript:
        return self.voice_client.get_call_transcript(call_id)
