"""Custom server form widget."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, Input, Static

from core.config import FormConfig
from core.controller import ServerConfigController
from core.models import Field, ServerConfig

from .constants import ERROR_ID, HELP_ID, HS_INPUT_ID, IS_INPUT_ID, SUBMIT_ID
from .modals import CustomServerHelpScreen


class ServerConfigForm(Container):
    """Homeserver/identity server inputs driven by a ServerConfigController.

    The widget only renders; edits, blurs and submits are forwarded to the
    controller, and controller state changes trigger a refresh.
    """

    def __init__(
        self,
        controller: ServerConfigController,
        server_config: ServerConfig,
        form_config: Optional[FormConfig] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self._server_config = server_config
        self._form = form_config or FormConfig()

    def compose(self):
        with Vertical(id="server-config-panel"):
            yield Static("Other servers", id="server-config-title")
            with Horizontal(id="server-config-intro"):
                yield Static("Enter custom server URLs", classes="subtle")
                yield Button("What does this mean?", id=HELP_ID, classes="link")
            yield Static("", id=ERROR_ID)
            with Vertical(id="server-config-fields"):
                yield Static("Homeserver URL", classes="form-label")
                yield Input(
                    value=self._controller.edit.hs_url,
                    placeholder=self._server_config.hs_url,
                    id=HS_INPUT_ID,
                )
                yield Static("Identity Server URL", classes="form-label")
                yield Input(
                    value=self._controller.edit.is_url,
                    placeholder=self._server_config.is_url,
                    id=IS_INPUT_ID,
                )
            if self._form.submit_text:
                submit = Button(self._form.submit_text, id=SUBMIT_ID, variant="primary")
                if self._form.submit_class:
                    submit.add_class(self._form.submit_class)
                yield submit

    def on_mount(self) -> None:
        self._controller.set_state_listener(self.refresh_state)
        self.refresh_state()

    def on_unmount(self) -> None:
        self._controller.set_state_listener(None)
        self._controller.close()

    def set_server_config(self, server_config: ServerConfig) -> None:
        """Owner pushed a new config (e.g. reset to the default server)."""

        self._server_config = server_config
        self.query_one(f"#{HS_INPUT_ID}", Input).placeholder = server_config.hs_url
        self.query_one(f"#{IS_INPUT_ID}", Input).placeholder = server_config.is_url
        self._controller.on_external_config_change(server_config)

    def refresh_state(self) -> None:
        busy = self._controller.busy
        hs_input = self.query_one(f"#{HS_INPUT_ID}", Input)
        is_input = self.query_one(f"#{IS_INPUT_ID}", Input)
        # Edits adopted by the controller (external config) flow back here.
        if hs_input.value != self._controller.edit.hs_url:
            hs_input.value = self._controller.edit.hs_url
        if is_input.value != self._controller.edit.is_url:
            is_input.value = self._controller.edit.is_url
        hs_input.disabled = busy
        is_input.disabled = busy

        error = self.query_one(f"#{ERROR_ID}", Static)
        error.update(self._controller.error_text)
        error.set_class(bool(self._controller.error_text), "status-error")

        for submit in self.query(f"#{SUBMIT_ID}").results(Button):
            submit.disabled = busy

    @on(Input.Changed, f"#{HS_INPUT_ID}")
    def _on_homeserver_change(self, event: Input.Changed) -> None:
        if event.value != self._controller.edit.hs_url:
            self._controller.on_field_change(Field.HS, event.value)

    @on(Input.Changed, f"#{IS_INPUT_ID}")
    def _on_identity_server_change(self, event: Input.Changed) -> None:
        if event.value != self._controller.edit.is_url:
            self._controller.on_field_change(Field.IS, event.value)

    @on(Input.Blurred, f"#{HS_INPUT_ID}")
    def _on_homeserver_blur(self, event: Input.Blurred) -> None:
        self._controller.on_field_blur(Field.HS)

    @on(Input.Blurred, f"#{IS_INPUT_ID}")
    def _on_identity_server_blur(self, event: Input.Blurred) -> None:
        self._controller.on_field_blur(Field.IS)

    @on(Input.Submitted)
    def _on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    @on(Button.Pressed, f"#{SUBMIT_ID}")
    def _on_submit_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._submit()

    @on(Button.Pressed, f"#{HELP_ID}")
    def _on_help_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.app.push_screen(CustomServerHelpScreen())

    def _submit(self) -> None:
        self.run_worker(self._controller.submit(), group="server-config-submit")
