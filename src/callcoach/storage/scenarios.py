"""CRUD over the scenarios.json file."""

from __future__ import annotations

import copy
import json
import logging
import threading
import time
from datetime import datetime, timezone
from pathlib import Path

from callcoach.errors import NotFoundError, ValidationError
from callcoach.storage.config_store import ConfigStore
from callcoach.storage.seed import DEFAULT_SCENARIOS
from callcoach.templating import process_template

logger = logging.getLogger(__name__)

# Fields resolved against the company when scenarios are read.
# systemPrompt stays a template until a call is created.
LIST_TEMPLATE_FIELDS = ("situation", "customerBackground")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ScenarioRepository:
    """Scenario definitions stored as one JSON array.

    Every mutation rewrites the whole file.
    """

    def __init__(self, path: Path, config_store: ConfigStore):
        self.path = Path(path)
        self.config_store = config_store
        self._lock = threading.RLock()

    # ── File access ────────────────────────────────────────────────

    def _load(self) -> list[dict]:
        if not self.path.exists():
            self._save(copy.deepcopy(DEFAULT_SCENARIOS))
        return json.loads(self.path.read_text())

    def _save(self, scenarios: list[dict]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(scenarios, indent=2) + "\n")

    def _resolve(self, scenario: dict, company: dict) -> dict:
        context = {"company": company}
        resolved = dict(scenario)
        for key in LIST_TEMPLATE_FIELDS:
            if key in resolved:
                resolved[key] = process_template(resolved[key], context)
        return resolved

    @staticmethod
    def _index_of(scenarios: list[dict], scenario_id: str) -> int:
        for i, s in enumerate(scenarios):
            if s.get("id") == scenario_id:
                return i
        return -1

    # ── Queries ────────────────────────────────────────────────────

    def list_all(self) -> list[dict]:
        """All scenarios with situation/background resolved."""
        with self._lock:
            scenarios = self._load()
        company = self.config_store.company()
        return [self._resolve(s, company) for s in scenarios]

    def get(self, scenario_id: str) -> dict:
        with self._lock:
            scenarios = self._load()
        index = self._index_of(scenarios, scenario_id)
        if index == -1:
            raise NotFoundError("Scenario not found")
        return self._resolve(scenarios[index], self.config_store.company())

    def get_raw(self, scenario_id: str) -> dict:
        """A scenario exactly as stored, placeholders untouched."""
        with self._lock:
            scenarios = self._load()
        index = self._index_of(scenarios, scenario_id)
        if index == -1:
            raise NotFoundError("Scenario not found")
        return scenarios[index]

    # ── Mutations ──────────────────────────────────────────────────

    def create(self, data: dict) -> dict:
        if not data.get("name") or not data.get("systemPrompt"):
            raise ValidationError("Name and system prompt are required")

        scenario = dict(data)
        # Millisecond IDs can collide if two scenarios land in the same ms
        scenario["id"] = f"custom-{int(time.time() * 1000)}"
        scenario["isCustom"] = True
        scenario["createdAt"] = _now_iso()

        with self._lock:
            scenarios = self._load()
            scenarios.append(scenario)
            self._save(scenarios)

        logger.info(f"Created scenario {scenario['id']}: {scenario['name']}")
        return scenario

    def update(self, scenario_id: str, patch: dict) -> dict:
        with self._lock:
            scenarios = self._load()
            index = self._index_of(scenarios, scenario_id)
            if index == -1:
                raise NotFoundError("Scenario not found")

            scenarios[index] = {
                **scenarios[index],
                **patch,
                "updatedAt": _now_iso(),
            }
            self._save(scenarios)
            updated = scenarios[index]

        logger.info(f"Updated scenario {scenario_id}")
        return updated

    def delete(self, scenario_id: str):
        with self._lock:
            scenarios = self._load()
            index = self._index_of(scenarios, scenario_id)
            if index == -1:
                raise NotFoundError("Scenario not found")

            del scenarios[index]
            self._save(scenarios)

        logger.info(f"Deleted scenario {scenario_id}")
