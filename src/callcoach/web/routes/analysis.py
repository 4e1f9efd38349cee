"""Coaching and sentiment analysis routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from callcoach.analysis.analyzer import TranscriptAnalyzer
from callcoach.errors import ValidationError
from callcoach.storage.config_store import ConfigStore
from callcoach.web.deps import get_analyzer, get_config_store
from callcoach.web.schemas import AnalyzeRequest, SentimentRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze")
def analyze(
    body: AnalyzeRequest,
    config_store: ConfigStore = Depends(get_config_store),
    analyzer: TranscriptAnalyzer = Depends(get_analyzer),
):
    """Coaching scorecard for a finished call."""
    if not body.transcript:
        raise ValidationError("Transcript is required")

    logger.info("Analyzing transcript for coaching feedback...")
    analysis = analyzer.analyze(body.transcript, "coaching", {
        "scenario": body.scenario,
        "company": config_store.company(),
        "callDuration": body.callDuration,
    })
    return {"success": True, "analysis": analysis}


@router.post("/sentiment")
def sentiment(
    body: SentimentRequest,
    analyzer: TranscriptAnalyzer = Depends(get_analyzer),
):
    """Quick sentiment read for real-time feedback."""
    if not body.text:
        raise ValidationError("Text is required")

    analysis = analyzer.analyze(body.text, "sentiment")
    if not isinstance(analysis, dict):
        analysis = {}
    return {
        "success": True,
        "sentiment": analysis.get("sentiment"),
        "confidence": analysis.get("confidence"),
    }
