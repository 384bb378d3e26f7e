"""Modal dialogs for the Textual server config panel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static

HELP_TEXT = (
    "You can use the custom server options to sign into other Matrix servers "
    "by specifying a different homeserver URL.\n\n"
    "This allows you to use this app with an existing Matrix account on a "
    "different homeserver.\n\n"
    "You can also set a custom identity server, but you won't be able to "
    "invite users by email address, or be invited by email address yourself."
)


class CustomServerHelpScreen(ModalScreen[None]):
    """Explain what the custom server fields are for."""

    BINDINGS = [("escape", "dismiss_help", "Close")]

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Custom Server Options", classes="modal-title"),
            Static(HELP_TEXT, classes="modal-body"),
            Horizontal(
                Button("Dismiss", id="help-dismiss", variant="primary"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--help",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "help-dismiss":
            self.dismiss(None)

    def action_dismiss_help(self) -> None:
        self.dismiss(None)
