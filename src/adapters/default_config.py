"""Default server configuration source."""

from __future__ import annotations

from core.models import ServerConfig


class StaticDefaultConfigSource:
    """Holds the built-in server config shared by the whole process."""

    def __init__(self, config: ServerConfig) -> None:
        self._config = config

    def get(self) -> ServerConfig:
        return self._config
