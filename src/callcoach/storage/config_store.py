"""JSON-file backed tenant configuration (company profile, settings)."""

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path

from callcoach.config import CONFIG_FILENAME, DEFAULT_VOICE_ID

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "company": {
        "name": "Accel Pest & Termite Control",
        "phone": "(555) 123-4567",
        "website": "https://www.accelpest.com",
        "logo": None,
        "colors": {
            "primary": "#2563eb",
            "secondary": "#1e40af",
            "accent": "#3b82f6",
        },
        "serviceAreas": ["Phoenix Metro", "Scottsdale", "Tempe", "Mesa", "Gilbert"],
        "services": [
            "Termite Control",
            "Ant Control",
            "Scorpion Control",
            "Rodent Control",
            "Bed Bug Treatment",
            "Mosquito Control",
            "Wildlife Removal",
        ],
        "pricing": {
            "quarterlyPrice": "149",
            "initialPrice": "199",
            "hasPublicPricing": True,
        },
        "guarantees": [
            "100% Satisfaction Guarantee",
            "Free Re-treatment if pests return",
        ],
        "valuePropositions": [
            "Same-day service available",
            "Family and pet safe treatments",
            "Licensed and insured technicians",
        ],
        "businessHours": "Mon-Sat 7am-7pm",
    },
    "settings": {
        "defaultVoiceId": DEFAULT_VOICE_ID,
        "callTimeout": 600000,  # ms
        "enableAnalytics": True,
    },
    "extractedIntelligence": {
        "companies": [],
        "terminology": [],
        "suggestedScenarios": [],
    },
}


def deep_merge(target: dict, source: dict) -> dict:
    """Merge `source` onto a copy of `target`.

    Source values win on conflicts at every level. Lists are replaced whole.
    """
    result = copy.deepcopy(target)
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


class ConfigStore:
    """Tenant configuration persisted to a single JSON file.

    Every write rewrites the whole file; writes are not atomic.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> dict:
        """Load the saved config merged onto the defaults.

        When no file exists (or it cannot be parsed) the defaults are
        written out and returned.
        """
        with self._lock:
            if self.path.exists():
                try:
                    saved = json.loads(self.path.read_text())
                    if isinstance(saved, dict):
                        return deep_merge(DEFAULT_CONFIG, saved)
                    logger.error(f"Config at {self.path} is not a JSON object, using defaults")
                except (OSError, json.JSONDecodeError) as e:
                    logger.error(f"Error loading config from {self.path}: {e}")

            config = copy.deepcopy(DEFAULT_CONFIG)
            self.save(config)
            return config

    def save(self, config: dict) -> bool:
        """Write `config` to disk. Returns False instead of raising on failure."""
        with self._lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(json.dumps(config, indent=2) + "\n")
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Error saving config to {self.path}: {e}")
                return False
            logger.info("Configuration saved")
            return True

    def reset(self) -> dict:
        with self._lock:
            config = copy.deepcopy(DEFAULT_CONFIG)
            self.save(config)
            return config

    def company(self) -> dict:
        return self.load().get("company") or {}

    def apply_company(self, company_data: dict) -> dict:
        """Shallow-merge `company_data` onto the company section and save."""
        with self._lock:
            config = self.load()
            config["company"] = {**(config.get("company") or {}), **company_data}
            self.save(config)
            return config["company"]

    def update(self, updates: dict) -> dict:
        """Apply a partial config.

        Dict values are merged one level deep into their section and None
        leaves the section untouched. Anything else replaces the section.
        """
        with self._lock:
            config = self.load()
            for key, value in updates.items():
                if value is None:
                    continue
                if isinstance(value, dict) and isinstance(config.get(key), dict):
                    config[key] = {**config[key], **value}
                else:
                    config[key] = value
            self.save(config)
            return config


def _get_default_store() -> ConfigStore:
    from callcoach import config as config_mod

    return ConfigStore(config_mod.DEFAULT_DATA_DIR / CONFIG_FILENAME)


def load_config() -> dict:
    """Load the config from the default data directory."""
    return _get_default_store().load()


def save_config(config: dict) -> bool:
    """Save the config to the default data directory."""
    return _get_default_store().save(config)
