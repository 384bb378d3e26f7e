"""Main Textual app for the hsconfig server picker."""

from __future__ import annotations

from typing import Any, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Footer, Static

from core.config import FormConfig, ValidationConfig
from core.controller import ServerConfigController
from core.models import ServerConfig
from core.ports import DefaultConfigSource, DiscoveryPort

from .constants import MATRIX_GREEN
from .server_config import ServerConfigForm
from .state import AppState


class ServerConfigApp(App[Optional[ServerConfig]]):
    """Server picker: edit, validate and confirm a homeserver config.

    Exits with the confirmed ServerConfig after a successful submit, or None
    when the user quits.
    """

    BINDINGS = [
        ("ctrl+d", "use_default", "Default server"),
        ("escape", "request_quit", "Quit"),
    ]

    CSS_PATH = "app.tcss"

    def __init__(
        self,
        server_config: ServerConfig,
        discovery: DiscoveryPort,
        default_source: DefaultConfigSource,
        validation_config: Optional[ValidationConfig] = None,
        form_config: Optional[FormConfig] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.app_state = AppState(server_config=server_config)
        self._default_source = default_source
        self._form_config = form_config or FormConfig()
        self.controller = ServerConfigController(
            server_config=server_config,
            discovery=discovery,
            default_source=default_source,
            on_server_config_change=self._on_server_config_change,
            on_after_submit=self._on_after_submit,
            config=validation_config,
        )

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static("sign in to a custom server", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static("", id="header-server", classes="subtle")
                    yield Static("", id="header-status")
        yield ServerConfigForm(
            self.controller,
            self.app_state.server_config,
            self._form_config,
            id="server-config",
        )
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_header()

    def action_use_default(self) -> None:
        self.query_one(ServerConfigForm).set_server_config(self._default_source.get())

    def action_request_quit(self) -> None:
        self.exit(None)

    def _on_server_config_change(self, config: ServerConfig) -> None:
        self.app_state.server_config = config
        self.app_state.last_validated = config
        self._refresh_header()

    def _on_after_submit(self) -> None:
        self.app_state.submitted = True
        self.exit(self.app_state.server_config)

    def _refresh_header(self) -> None:
        server = self.query_one("#header-server", Static)
        status = self.query_one("#header-status", Static)
        config = self.app_state.server_config
        server.update(f"homeserver: {config.hs_name or config.hs_url}")

        status.remove_class("status-loaded", "status-modified")
        if self.app_state.last_validated is None:
            status.update("server: not validated")
            status.add_class("status-modified")
        else:
            status.update("server: validated")
            status.add_class("status-loaded")

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("HS", MATRIX_GREEN),
            ("CONFIG > Other servers", "bold"),
        )
