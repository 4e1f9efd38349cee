"""Dependency injection for web routes.

Components are built once in `create_app` and kept on ``app.state``.
"""

from __future__ import annotations

from fastapi import Request

from callcoach.analysis.analyzer import TranscriptAnalyzer
from callcoach.calls import TrainingCallService
from callcoach.errors import ConfigurationError
from callcoach.llm.client import create_client as create_llm_client
from callcoach.storage.config_store import ConfigStore
from callcoach.storage.scenarios import ScenarioRepository


def get_config_store(request: Request) -> ConfigStore:
    return request.app.state.config_store


def get_scenarios(request: Request) -> ScenarioRepository:
    return request.app.state.scenarios


def get_call_service(request: Request) -> TrainingCallService:
    return request.app.state.call_service


def get_analyzer(request: Request) -> TranscriptAnalyzer:
    """The analyzer, creating the Claude client on first use."""
    state = request.app.state
    if state.analyzer is None:
        try:
            llm = create_llm_client(state.settings.anthropic_api_key)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        state.analyzer = TranscriptAnalyzer(llm)
    return state.analyzer


def get_scrape_http_client(request: Request):
    return request.app.state.scrape_http_client
