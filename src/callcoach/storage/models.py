"""Data models for CallCoach."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TranscriptLine:
    role: str  # "customer" (the remote agent) or "csr" (the trainee)
    content: str
    timestamp: Optional[str] = None

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content, "timestamp": self.timestamp}


@dataclass
class Transcript:
    raw: str
    formatted: list[TranscriptLine] = field(default_factory=list)
    duration: float = 0
    call_status: Optional[str] = None
    disconnection_reason: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.raw

    def to_dict(self) -> dict:
        return {
            "raw": self.raw,
            "formatted": [line.to_dict() for line in self.formatted],
            "duration": self.duration,
            "callStatus": self.call_status,
            "disconnectionReason": self.disconnection_reason,
        }


@dataclass
class CallSession:
    call_id: str
    agent_id: str
    scenario_id: Optional[str]
    scenario: dict
    company: dict
    start_time: str  # ISO-8601
    llm_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "callId": self.call_id,
            "agentId": self.agent_id,
            "llmId": self.llm_id,
            "scenarioId": self.scenario_id,
            "scenario": self.scenario,
            "company": self.company,
            "startTime": self.start_time,
        }
