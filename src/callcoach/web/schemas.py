"""Request bodies for the JSON API.

Every field is optional. Missing required fields are reported by the
services as ValidationError (HTTP 400 with a message).
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class CreateCallRequest(BaseModel):
    scenarioId: Optional[str] = None
    scenario: Optional[Dict[str, Any]] = None


class EndCallRequest(BaseModel):
    callId: Optional[str] = None


class AnalyzeRequest(BaseModel):
    transcript: Optional[str] = None
    scenario: Optional[Dict[str, Any]] = None
    callDuration: Optional[float] = None


class SentimentRequest(BaseModel):
    text: Optional[str] = None


class ScrapeRequest(BaseModel):
    url: Optional[str] = None


class ApplyCompanyRequest(BaseModel):
    companyData: Optional[Dict[str, Any]] = None


class LoadTranscriptRequest(BaseModel):
    transcript: Optional[str] = None
