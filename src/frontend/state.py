"""State container for the server the app currently uses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.models import ServerConfig


@dataclass
class AppState:
    server_config: ServerConfig
    submitted: bool = False
    last_validated: Optional[ServerConfig] = None
