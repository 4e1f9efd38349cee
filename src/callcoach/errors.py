"""Exceptions raised by CallCoach services.

Each carries the HTTP status the web layer should answer with.
"""

from __future__ import annotations


class CallCoachError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(CallCoachError):
    """A required request field is missing or malformed."""

    status_code = 400


class UnknownAnalysisTypeError(ValidationError):
    def __init__(self, analysis_type: str):
        self.analysis_type = analysis_type
        super().__init__(f"Unknown analysis type: {analysis_type}")


class ConfigurationError(CallCoachError):
    """A required setting (usually an API key) is not configured."""

    status_code = 500


class NotFoundError(CallCoachError):
    """Unknown scenario or call ID."""

    status_code = 404


class UpstreamError(CallCoachError):
    """The voice-agent or LLM provider call failed."""

    status_code = 500

    def __init__(self, message: str, provider: str | None = None):
        self.provider = provider
        super().__init__(message)

    def __str__(self):
        if self.provider:
            return f"{self.message} ({self.provider})"
        return self.message


class ScrapeError(UpstreamError):
    """The primary page of a company website could not be fetched."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)
