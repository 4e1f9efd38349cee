"""Configuration and constants for CallCoach."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_DATA_DIR = PROJECT_ROOT / "data"
CONFIG_FILENAME = "config.json"
SCENARIOS_FILENAME = "scenarios.json"

# Claude model used for coaching and extraction
MODEL_DEFAULT = "claude-sonnet-4-20250514"

# Retell
RETELL_BASE_URL = "https://api.retellai.com"
DEFAULT_VOICE_ID = "11labs-Adrian"
DEFAULT_SAMPLE_RATE = 24000

# HTTP server
DEFAULT_PORT = 3001
DEFAULT_CLIENT_URL = "http://localhost:5173"


@dataclass
class Settings:
    """Process-wide settings, usually read from the environment."""

    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)
    anthropic_api_key: str | None = None
    retell_api_key: str | None = None
    client_url: str = DEFAULT_CLIENT_URL
    port: int = DEFAULT_PORT
    env: str = "production"

    @property
    def config_path(self) -> Path:
        return self.data_dir / CONFIG_FILENAME

    @property
    def scenarios_path(self) -> Path:
        return self.data_dir / SCENARIOS_FILENAME

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @classmethod
    def from_env(cls, data_dir: Path | str | None = None) -> Settings:
        """Build settings from environment variables.

        CALLCOACH_DATA_DIR, ANTHROPIC_API_KEY, RETELL_API_KEY, CLIENT_URL,
        PORT and CALLCOACH_ENV are honoured. An explicit data_dir wins over
        the environment.
        """
        if data_dir is None:
            data_dir = os.environ.get("CALLCOACH_DATA_DIR") or DEFAULT_DATA_DIR
        return cls(
            data_dir=Path(data_dir),
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY") or None,
            retell_api_key=os.environ.get("RETELL_API_KEY") or None,
            client_url=os.environ.get("CLIENT_URL", DEFAULT_CLIENT_URL),
            port=int(os.environ.get("PORT", DEFAULT_PORT)),
            env=os.environ.get("CALLCOACH_ENV", "production"),
        )
