"""Retell conversational-voice API client.

Per call: create LLM + agent -> create web call -> end call -> fetch
transcript. Retell finalizes transcripts asynchronously after a call
ends, so `wait_for_transcript` polls with backoff.
"""

from __future__ import annotations

import logging
import re
import time
from datetime import datetime
from typing import Any, Callable, Optional

import httpx

from callcoach.config import DEFAULT_VOICE_ID, RETELL_BASE_URL
from callcoach.errors import UpstreamError
from callcoach.storage.models import Transcript, TranscriptLine

logger = logging.getLogger(__name__)

RETELL_LLM_MODEL = "gpt-4o"
WEB_CALL_SOURCE = "csr-training-simulator"

# Agent tuning used for every training agent
AGENT_TUNING = {
    "language": "en-US",
    "opt_out_sensitive_data_storage": False,
    "ambient_sound": "coffee-shop",
    "backchannel_frequency": 0.5,
    "enable_backchannel": True,
    "interruption_sensitivity": 0.8,
    "responsiveness": 0.8,
}

# The Retell agent plays the customer; the human on the web call is the CSR.
SPEAKER_ROLES = {"agent": "customer", "user": "csr"}

TRANSCRIPT_LINE_RE = re.compile(r"^(Agent|User):\s*(.*)$")


def parse_transcript(text: str) -> list[TranscriptLine]:
    """Parse "Agent: ..." / "User: ..." lines; anything else is dropped."""
    lines = []
    for line in (text or "").split("\n"):
        match = TRANSCRIPT_LINE_RE.match(line)
        if not match:
            continue
        lines.append(
            TranscriptLine(
                role=SPEAKER_ROLES[match.group(1).lower()],
                content=match.group(2).strip(),
            )
        )
    return lines


def _to_seconds(ts) -> Optional[float]:
    """Retell timestamps are epoch milliseconds; ISO strings are accepted too."""
    if ts is None:
        return None
    if isinstance(ts, (int, float)):
        return ts / 1000
    try:
        return datetime.fromisoformat(str(ts).replace("Z", "+00:00")).timestamp()
    except ValueError:
        return None


def call_duration(call: dict) -> float:
    start = _to_seconds(call.get("start_timestamp"))
    end = _to_seconds(call.get("end_timestamp"))
    if start is None or end is None:
        return 0
    return end - start


class RetellClient:
    def __init__(
        self,
        api_key: str | None,
        base_url: str = RETELL_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http_client or httpx.Client(timeout=timeout)

        if not api_key:
            logger.warning("RetellClient initialized without an API key")

    def close(self):
        self._http.close()

    # ── HTTP plumbing ──────────────────────────────────────────────

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, json: dict | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._http.request(
                method, url, headers=self._headers(), json=json, timeout=self.timeout
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Retell API HTTP error: {e.response.status_code} - {e.response.text}")
            raise UpstreamError(
                f"Retell API error {e.response.status_code}: {e.response.text}",
                provider="retell",
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Retell API request error: {e}")
            raise UpstreamError(f"Retell API request failed: {e}", provider="retell") from e

        if not response.content:
            return {}
        return response.json()

    # ── Agents ─────────────────────────────────────────────────────

    def create_llm(self, prompt: str, first_message: str | None = None) -> dict:
        """Provision a Retell LLM holding the roleplay prompt."""
        llm = self._request("POST", "/create-retell-llm", json={
            "model": RETELL_LLM_MODEL,
            "general_prompt": prompt,
            "begin_message": first_message,
            "general_tools": [],
        })
        logger.info(f"Created Retell LLM: {llm.get('llm_id')}")
        return llm

    def create_agent(
        self,
        name: str,
        prompt: str,
        voice_id: str | None = None,
        first_message: str | None = None,
    ) -> dict:
        """Create an LLM config, then an agent bound to it.

        Returns the agent record with ``llm_id`` added. Provider errors
        surface as UpstreamError with no retry.
        """
        llm = self.create_llm(prompt, first_message)
        agent = self._request("POST", "/create-agent", json={
            "agent_name": name,
            "response_engine": {"type": "retell-llm", "llm_id": llm["llm_id"]},
            "voice_id": voice_id or DEFAULT_VOICE_ID,
            **AGENT_TUNING,
        })
        logger.info(f"Created Retell agent: {agent.get('agent_id')}")
        return {**agent, "llm_id": llm["llm_id"]}

    def delete_agent(self, agent_id: str) -> bool:
        """Best-effort cleanup; never raises."""
        try:
            self._request("DELETE", f"/delete-agent/{agent_id}")
        except UpstreamError as e:
            logger.warning(f"Error deleting agent {agent_id}: {e}")
            return False
        logger.info(f"Deleted agent: {agent_id}")
        return True

    def list_voices(self) -> list:
        return self._request("GET", "/list-voices")

    # ── Calls ──────────────────────────────────────────────────────

    def create_web_call(self, agent_id: str) -> dict:
        """Open a browser call; the result carries call_id and access_token."""
        web_call = self._request("POST", "/v2/create-web-call", json={
            "agent_id": agent_id,
            "metadata": {"source": WEB_CALL_SOURCE},
        })
        logger.info(f"Created web call: {web_call.get('call_id')}")
        return web_call

    def end_call(self, call_id: str) -> bool:
        self._request("POST", "/v2/end-call", json={"call_id": call_id})
        logger.info(f"Ended call: {call_id}")
        return True

    def get_call_transcript(self, call_id: str) -> Transcript:
        """Fetch the call record and structure its transcript.

        A call with no transcript text is a normal outcome and yields an
        empty Transcript.
        """
        call = self._request("GET", f"/v2/get-call/{call_id}")
        duration = call_duration(call)
        raw = call.get("transcript")

        if not raw:
            return Transcript(raw="", formatted=[], duration=duration)

        return Transcript(
            raw=raw,
            formatted=parse_transcript(raw),
            duration=duration,
            call_status=call.get("call_status"),
            disconnection_reason=call.get("disconnection_reason"),
        )

    def wait_for_transcript(
        self,
        call_id: str,
        attempts: int = 5,
        initial_delay: float = 1.0,
        backoff: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> Transcript:
        """Poll until the transcript has text or attempts run out.

        Sleeps initial_delay * backoff**n before attempt n. Returns the last
        transcript fetched, which may be empty.
        """
        transcript = None
        for attempt in range(attempts):
            sleep(initial_delay * backoff ** attempt)
            transcript = self.get_call_transcript(call_id)
            if not transcript.is_empty:
                return transcript
            logger.debug(f"Transcript for {call_id} not ready (attempt {attempt + 1}/{attempts})")
        if transcript is None:
            transcript = self.get_call_transcript(call_id)
        logger.warning(f"Transcript for {call_id} still empty after {attempts} attempts")
        return transcript
