"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_USER_AGENT = "hsconfig/1.0"


@dataclass(frozen=True)
class ValidationConfig:
    """Debounce and discovery settings for the validation controller."""

    delay_ms: int = 0
    timeout_seconds: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class FormConfig:
    """Presentation options for the server config form."""

    # No submit button is rendered when submit_text is empty.
    submit_text: str = "Next"
    submit_class: Optional[str] = None
