from __future__ import annotations

import asyncio
from typing import Optional, Union

from core.config import ValidationConfig
from core.controller import ServerConfigController
from core.errors import DiscoveryError
from core.models import ServerConfig

DEFAULT = ServerConfig(
    hs_url="https://matrix.org",
    is_url="https://vector.im",
    hs_name="matrix.org",
)
CUSTOM = ServerConfig(
    hs_url="https://custom.example",
    is_url="https://id.custom.example",
    hs_name="custom.example",
)


class FakeDefaultSource:
    def __init__(self, config: ServerConfig = DEFAULT) -> None:
        self.config = config

    def get(self) -> ServerConfig:
        return self.config


Outcome = Union[ServerConfig, Exception, "asyncio.Future[ServerConfig]"]


class FakeDiscovery:
    """Answers validate() from a queue of outcomes.

    An outcome may be a config, an exception to raise, or a future to await
    so tests control when a call resolves.
    """

    def __init__(self, *outcomes: Outcome) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, str]] = []

    async def validate(self, hs_url: str, is_url: str) -> ServerConfig:
        self.calls.append((hs_url, is_url))
        if self.outcomes:
            outcome = self.outcomes.pop(0)
        else:
            outcome = ServerConfig(hs_url=hs_url, is_url=is_url, hs_name="fake")
        if isinstance(outcome, asyncio.Future):
            return await outcome
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class Recorder:
    """Collects owner callbacks and every busy/error transition."""

    def __init__(self) -> None:
        self.configs: list[ServerConfig] = []
        self.busy_at_callback: list[bool] = []
        self.after_submit = 0
        self.states: list[tuple[bool, str]] = []
        self.controller: Optional[ServerConfigController] = None

    def on_server_config_change(self, config: ServerConfig) -> None:
        assert self.controller is not None
        self.busy_at_callback.append(self.controller.busy)
        self.configs.append(config)

    def on_after_submit(self) -> None:
        self.after_submit += 1

    def on_state_changed(self) -> None:
        assert self.controller is not None
        busy = self.controller.busy
        error_text = self.controller.error_text
        assert not (busy and error_text)
        if not self.states or self.states[-1] != (busy, error_text):
            self.states.append((busy, error_text))


def make_controller(
    discovery: FakeDiscovery,
    *,
    server_config: ServerConfig = DEFAULT,
    default: ServerConfig = DEFAULT,
    delay_ms: int = 0,
    translate=None,
) -> tuple[ServerConfigController, Recorder]:
    recorder = Recorder()
    controller = ServerConfigController(
        server_config=server_config,
        discovery=discovery,
        default_source=FakeDefaultSource(default),
        on_server_config_change=recorder.on_server_config_change,
        on_after_submit=recorder.on_after_submit,
        config=ValidationConfig(delay_ms=delay_ms),
        translate=translate,
        state_changed=recorder.on_state_changed,
    )
    recorder.controller = controller
    return controller, recorder


def bad_server() -> DiscoveryError:
    return DiscoveryError("probe failed", translated_message="Bad server")
