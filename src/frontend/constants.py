"""Shared constants for the Textual UI."""

from __future__ import annotations

MATRIX_GREEN = "#0DBD8B"

HS_INPUT_ID = "hs-url"
IS_INPUT_ID = "is-url"
ERROR_ID = "server-config-error"
SUBMIT_ID = "server-config-submit"
HELP_ID = "server-config-help"
