"""Core domain models.

These dataclasses are shared across the core, adapters and the frontend so
none of them depends on discovery- or widget-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Field(str, Enum):
    """The two editable URL fields of the form."""

    HS = "hs"
    IS = "is"


@dataclass(frozen=True)
class ServerConfig:
    """A validated homeserver/identity server pair."""

    hs_url: str
    is_url: str
    hs_name: str = ""
    hs_name_is_different: bool = False
    identity_enabled: bool = True

    def matches_urls(self, hs_url: str, is_url: str) -> bool:
        """Return True when both URLs equal this config's URLs exactly."""

        return self.hs_url == hs_url and self.is_url == is_url


@dataclass
class EditState:
    """Raw, possibly invalid URLs as typed by the user."""

    hs_url: str = ""
    is_url: str = ""

    def set(self, field: Field, value: str) -> None:
        if field is Field.HS:
            self.hs_url = value
        else:
            self.is_url = value


@dataclass
class ValidationState:
    """Outcome of the latest validation attempt.

    `busy` implies an empty `error_text`: starting an attempt clears the
    previous error.
    """

    busy: bool = False
    error_text: str = ""

    def start(self) -> None:
        self.busy = True
        self.error_text = ""

    def succeed(self) -> None:
        self.busy = False
        self.error_text = ""

    def fail(self, message: str) -> None:
        self.busy = False
        self.error_text = message
