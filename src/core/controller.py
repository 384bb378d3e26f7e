"""Validation controller for the custom server form.

The controller owns the user's in-progress URL edits and the state of the
latest validation attempt. It is integration-agnostic: discovery, the default
server and translation are injected, and the presentation layer only sees
plain state objects and callbacks.

Validation order:
1) Read the URLs to validate (current edits or an external config)
2) Fast path: URLs equal the default server -> use the default, no network
3) Slow path: mark busy, await the discovery collaborator
4) Drop the result if a newer attempt started meanwhile
5) Apply success (owner callback) or failure (translated error text)
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from core.config import ValidationConfig
from core.debounce import FieldDebouncer
from core.models import EditState, Field, ServerConfig, ValidationState
from core.ports import DefaultConfigSource, DiscoveryPort, Translator

LOGGER = logging.getLogger(__name__)

GENERIC_ERROR = "Unable to validate homeserver/identity server"


def _identity(text: str) -> str:
    return text


class ServerConfigController:
    """Tracks URL edits and debounces/serializes their validation."""

    def __init__(
        self,
        server_config: ServerConfig,
        discovery: DiscoveryPort,
        default_source: DefaultConfigSource,
        on_server_config_change: Callable[[ServerConfig], None],
        on_after_submit: Optional[Callable[[], None]] = None,
        config: Optional[ValidationConfig] = None,
        translate: Optional[Translator] = None,
        state_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._config = config or ValidationConfig()
        self._discovery = discovery
        self._default_source = default_source
        self._on_server_config_change = on_server_config_change
        self._on_after_submit = on_after_submit
        self._translate = translate or _identity
        self._state_changed = state_changed
        self._debouncer = FieldDebouncer(self._config.delay_ms)
        self._attempt = 0

        self.edit = EditState(hs_url=server_config.hs_url, is_url=server_config.is_url)
        self.validation = ValidationState()

    @property
    def busy(self) -> bool:
        return self.validation.busy

    @property
    def error_text(self) -> str:
        return self.validation.error_text

    @property
    def attempt(self) -> int:
        """Sequence number of the most recently started attempt."""

        return self._attempt

    def set_state_listener(self, listener: Optional[Callable[[], None]]) -> None:
        self._state_changed = listener

    # Input tracking

    def on_field_change(self, field: Union[Field, str], raw_value: str) -> None:
        """Record an edit. Validation only happens on blur or submit."""

        self.edit.set(Field(field), raw_value)
        self._notify()

    def on_external_config_change(self, new_config: ServerConfig) -> None:
        """Adopt a config pushed by the owner and validate it."""

        if new_config.matches_urls(self.edit.hs_url, self.edit.is_url):
            return

        self._debouncer.cancel_all()
        self.edit.hs_url = new_config.hs_url
        self.edit.is_url = new_config.is_url
        self._notify()
        hs_url, is_url = new_config.hs_url, new_config.is_url
        self._debouncer.spawn(lambda: self.validate_and_apply_server(hs_url, is_url))

    # Validation

    def on_field_blur(self, field: Union[Field, str]) -> None:
        """Schedule validation of the current edits for this field's timer."""

        self._debouncer.trigger(Field(field), self.validate_server)

    def is_pending(self, field: Union[Field, str]) -> bool:
        return self._debouncer.is_pending(Field(field))

    async def validate_server(self) -> Optional[ServerConfig]:
        """Validate whatever the user has typed right now."""

        # TODO: resolve bare server names (e.g. "example.org") through
        # .well-known discovery before validating them as static URLs.
        return await self.validate_and_apply_server(self.edit.hs_url, self.edit.is_url)

    async def validate_and_apply_server(self, hs_url: str, is_url: str) -> Optional[ServerConfig]:
        """Validate a URL pair and apply the outcome.

        Returns the validated config, or None when validation failed or was
        superseded by a newer attempt.
        """

        self._attempt += 1
        attempt = self._attempt

        # Always try the defaults first
        default_config = self._default_source.get()
        if default_config.matches_urls(hs_url, is_url):
            self.validation.succeed()
            self._notify()
            self._on_server_config_change(default_config)
            return default_config

        self.edit.hs_url = hs_url
        self.edit.is_url = is_url
        self.validation.start()
        self._notify()

        try:
            result = await self._discovery.validate(hs_url, is_url)
        except Exception as exc:
            if attempt != self._attempt:
                LOGGER.debug("Discarding failure of superseded attempt %s", attempt)
                return None
            LOGGER.exception("Failed to validate homeserver %s / identity server %s", hs_url, is_url)
            self.validation.fail(self._error_message(exc))
            self._notify()
            return None

        if attempt != self._attempt:
            LOGGER.debug("Discarding result of superseded attempt %s", attempt)
            return None

        self.validation.succeed()
        self._notify()
        self._on_server_config_change(result)
        return result

    async def submit(self) -> bool:
        """Validate the current edits; fire after-submit only on success."""

        # Blurs triggered before the submit must not fire after it and take
        # a newer attempt number.
        self._debouncer.cancel_all()
        result = await self.validate_server()
        if result is None:
            return False

        if self._on_after_submit is not None:
            self._on_after_submit()
        return True

    async def wait_idle(self) -> None:
        """Wait for pending debounce timers and the validations they start."""

        await self._debouncer.wait_idle()

    def close(self) -> None:
        """Cancel pending timers; in-flight validations finish on their own."""

        self._debouncer.cancel_all()

    def _error_message(self, exc: Exception) -> str:
        # Any error may carry a translated message, not only DiscoveryError.
        message = getattr(exc, "translated_message", None)
        if message:
            return message
        return self._translate(GENERIC_ERROR)

    def _notify(self) -> None:
        if self._state_changed is not None:
            self._state_changed()
