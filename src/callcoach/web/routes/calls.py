"""Training call routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from callcoach.calls import TrainingCallService
from callcoach.web.deps import get_call_service
from callcoach.web.schemas import CreateCallRequest, EndCallRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create-training-call")
def create_training_call(
    body: CreateCallRequest,
    service: TrainingCallService = Depends(get_call_service),
):
    """Create a customer agent for the scenario and open a web call."""
    result = service.create_training_call(body.scenarioId, body.scenario)
    logger.info(f"Training call {result['callId']} started")
    return {"success": True, **result}


@router.post("/end")
def end_call(
    body: EndCallRequest,
    service: TrainingCallService = Depends(get_call_service),
):
    """End a call and return its transcript."""
    return {"success": True, **service.end_training_call(body.callId)}


@router.get("/status/{call_id}")
def call_status(call_id: str, service: TrainingCallService = Depends(get_call_service)):
    return {"success": True, "callInfo": service.get_status(call_id).to_dict()}


@router.get("/transcript/{call_id}")
def call_transcript(call_id: str, service: TrainingCallService = Depends(get_call_service)):
    return {"success": True, "transcript": service.get_transcript(call_id).to_dict()}
