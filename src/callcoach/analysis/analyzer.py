"""Send transcripts and website text to Claude and parse the JSON it returns."""

from __future__ import annotations

import logging

from callcoach.analysis.parsing import extract_json_response
from callcoach.analysis.prompts import (
    build_coaching_prompt,
    build_company_extraction_prompt,
    build_intelligence_extraction_prompt,
    build_sentiment_prompt,
)
from callcoach.errors import UnknownAnalysisTypeError, UpstreamError

logger = logging.getLogger(__name__)

ANALYSIS_MAX_TOKENS = 4096
COMPANY_MAX_TOKENS = 2048

ANALYSIS_TYPES = ("coaching", "extract", "sentiment")


class TranscriptAnalyzer:
    """Coaching scorecards, sentiment and intelligence extraction via an LLM client.

    `llm_client` is anything with ``complete(system, user, max_tokens)``
    returning an object with a ``content`` string.
    """

    def __init__(self, llm_client):
        self.llm_client = llm_client

    def analyze(
        self,
        transcript: str,
        analysis_type: str = "coaching",
        context: dict | None = None,
    ):
        """Run one analysis over `transcript`.

        Returns the parsed JSON object, or ``{"raw": ..., "parseError": True}``
        when the model reply is not valid JSON.
        """
        if analysis_type == "coaching":
            prompts = build_coaching_prompt(transcript, context or {})
        elif analysis_type == "extract":
            prompts = build_intelligence_extraction_prompt(transcript)
        elif analysis_type == "sentiment":
            prompts = build_sentiment_prompt(transcript)
        else:
            raise UnknownAnalysisTypeError(analysis_type)

        content = self._complete(prompts.system, prompts.user, ANALYSIS_MAX_TOKENS)
        return extract_json_response(content)

    def extract_company_intelligence(self, website_content: str):
        """Structured company facts from scraped website text."""
        prompts = build_company_extraction_prompt(website_content)
        content = self._complete(prompts.system, prompts.user, COMPANY_MAX_TOKENS)
        return extract_json_response(content)

    def _complete(self, system: str, user: str, max_tokens: int) -> str:
        try:
            response = self.llm_client.complete(system, user, max_tokens)
        except Exception as e:
            logger.error(f"Error calling Claude API: {e}")
            raise UpstreamError(str(e), provider="anthropic") from e
        return response.content
