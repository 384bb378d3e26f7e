"""Ports (interfaces) used by the validation controller.

Ports define the minimal contracts for discovery and default-config
collaborators so the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from core.models import ServerConfig


class DiscoveryPort(Protocol):
    """Validates a homeserver/identity server pair.

    Implementations raise `core.errors.DiscoveryError` (optionally carrying a
    translated message) when the servers cannot be validated.
    """

    async def validate(self, hs_url: str, is_url: str) -> ServerConfig:
        ...


class DefaultConfigSource(Protocol):
    """Process-wide accessor for the built-in server configuration."""

    def get(self) -> ServerConfig:
        ...


class Translator(Protocol):
    def __call__(self, text: str) -> str:
        ...
