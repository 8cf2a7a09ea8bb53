"""
Configuration for the Lunch Money MCP server.

Values come from environment variables. A ``.env`` file in the project root
is auto-loaded if present; variables already set in the environment win.

Environment variables:
    LUNCHMONEY_API_TOKEN: Access token generated in Lunch Money developer settings
    LUNCHMONEY_API_URL:   Base URL of the Lunch Money API
                          (default: https://dev.lunchmoney.app/v1)
    LUNCHMONEY_TMP_DIR:   Directory for response_mode="file" output
                          (default: /tmp/lunchmoney-mcp)
    LUNCHMONEY_TIMEOUT:   HTTP timeout in seconds (default: 30)
    LUNCHMONEY_LOG_LEVEL: Logging level (default: INFO)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_API_URL = "https://dev.lunchmoney.app/v1"
DEFAULT_TMP_DIR = "/tmp/lunchmoney-mcp"
DEFAULT_TIMEOUT = 30.0

_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"


def load_env_file(path: Path = _ENV_PATH) -> None:
    """Load KEY=VALUE lines from a .env file without overriding the environment."""
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, _, value = line.partition("=")
            os.environ.setdefault(key.strip(), value.strip().strip('"').strip("'"))


@dataclass(frozen=True)
class Settings:
    api_url: str
    api_token: str
    tmp_dir: Path
    timeout: float
    log_level: str


def get_settings(env_file: Optional[Path] = _ENV_PATH) -> Settings:
    """Read settings from the environment (after loading the .env file)."""
    if env_file is not None:
        load_env_file(env_file)

    timeout_raw = os.environ.get("LUNCHMONEY_TIMEOUT", "")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
    except ValueError:
        raise ValueError(f"LUNCHMONEY_TIMEOUT must be a number, got {timeout_raw!r}")

    return Settings(
        api_url=os.environ.get("LUNCHMONEY_API_URL", DEFAULT_API_URL).rstrip("/"),
        api_token=os.environ.get("LUNCHMONEY_API_TOKEN", ""),
        tmp_dir=Path(os.environ.get("LUNCHMONEY_TMP_DIR", DEFAULT_TMP_DIR)),
        timeout=timeout,
        log_level=os.environ.get("LUNCHMONEY_LOG_LEVEL", "INFO").upper(),
    )
