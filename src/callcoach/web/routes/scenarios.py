"""Scenario CRUD routes."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from callcoach.storage.scenarios import ScenarioRepository
from callcoach.voice.voices import CURATED_VOICES
from callcoach.web.deps import get_scenarios

router = APIRouter()


@router.get("/meta/voices")
async def list_voices():
    """Voices offered in the scenario editor."""
    return {"success": True, "voices": CURATED_VOICES}


@router.get("")
def list_scenarios(repo: ScenarioRepository = Depends(get_scenarios)):
    return {"success": True, "scenarios": repo.list_all()}


@router.get("/{scenario_id}")
def get_scenario(scenario_id: str, repo: ScenarioRepository = Depends(get_scenarios)):
    return {"success": True, "scenario": repo.get(scenario_id)}


@router.post("")
def create_scenario(
    data: Dict[str, Any] = Body(...),
    repo: ScenarioRepository = Depends(get_scenarios),
):
    return {"success": True, "scenario": repo.create(data)}


@router.put("/{scenario_id}")
def update_scenario(
    scenario_id: str,
    patch: Dict[str, Any] = Body(...),
    repo: ScenarioRepository = Depends(get_scenarios),
):
    return {"success": True, "scenario": repo.update(scenario_id, patch)}


@router.delete("/{scenario_id}")
def delete_scenario(scenario_id: str, repo: ScenarioRepository = Depends(get_scenarios)):
    repo.delete(scenario_id)
    return {"success": True, "message": "Scenario deleted"}
