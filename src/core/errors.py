"""Errors raised across the discovery boundary."""

from __future__ import annotations

from typing import Optional


class DiscoveryError(Exception):
    """Server discovery failed.

    `translated_message` is a user-facing, already translated explanation.
    When it is missing the controller falls back to a generic message.
    """

    def __init__(self, message: str = "", translated_message: Optional[str] = None) -> None:
        super().__init__(message or translated_message or "discovery failed")
        self.translated_message = translated_message
