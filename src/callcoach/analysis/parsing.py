"""Pull a JSON payload out of a free-text model reply.

Fallback chain: first fenced code block -> whole reply -> parse-error
marker. Malformed output never raises; callers get
``{"raw": text, "parseError": True}`` and decide how to degrade.
"""

from __future__ import annotations

import json
import logging
import re

logger = logging.getLogger(__name__)

FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def find_json_text(text: str) -> str:
    """Return the candidate JSON text: a fenced block if present, else everything."""
    match = FENCED_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def is_parse_error(result) -> bool:
    return isinstance(result, dict) and result.get("parseError") is True


def extract_json_response(text: str):
    try:
        return json.loads(find_json_text(text))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse model response as JSON: {e}")
        return {"raw": text, "parseError": True}
