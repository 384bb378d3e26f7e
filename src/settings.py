"""Static configuration for hsconfig.

All user-editable settings (default server, validation timing, form labels,
logging) live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

from core.config import DEFAULT_USER_AGENT, FormConfig, ValidationConfig
from core.models import ServerConfig

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# HSCONFIG_CONFIG points at another config file, e.g. one per deployment.
CONFIG_PATH = os.getenv("HSCONFIG_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        loaded = json.load(handle)
    if not isinstance(loaded, dict):
        raise ValueError("config root must be an object")
    return loaded


def parse_default_server(raw: dict) -> ServerConfig:
    """Build the built-in ServerConfig from the default_server section."""

    hs_url = raw.get("hs_url")
    if not hs_url:
        raise ValueError("default_server.hs_url is required")
    is_url = raw.get("is_url", "") or ""
    return ServerConfig(
        hs_url=hs_url,
        is_url=is_url,
        hs_name=raw.get("hs_name", ""),
        hs_name_is_different=bool(raw.get("hs_name_is_different", False)),
        identity_enabled=bool(is_url),
    )


def parse_validation(raw: dict) -> ValidationConfig:
    return ValidationConfig(
        delay_ms=int(raw.get("delay_ms", 0)),
        timeout_seconds=float(raw.get("timeout_seconds", 10)),
        user_agent=raw.get("user_agent", DEFAULT_USER_AGENT),
    )


def parse_form(raw: dict) -> FormConfig:
    return FormConfig(
        submit_text=raw.get("submit_text", "Next"),
        submit_class=raw.get("submit_class"),
    )


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# The built-in server; matching URLs skip network validation entirely.
DEFAULT_SERVER_CONFIG = parse_default_server(_CONFIG.get("default_server", {}))

# Debounce delay (ms) after a field loses focus and discovery HTTP settings.
VALIDATION = parse_validation(_CONFIG.get("validation", {}))

# Submit button label/class; an empty submit_text hides the button.
FORM = parse_form(_CONFIG.get("form", {}))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
