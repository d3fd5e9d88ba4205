"""Customer name entry modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Static


class CustomerModal(ModalScreen[str | None]):
    """Capture the name of the customer the order belongs to."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    CSS = """
    CustomerModal {
        align: center middle;
        background: $background 60%;
    }

    #customer-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #customer-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #customer-error {
        color: #ffb3b3;
    }
    """

    def __init__(self, current: str | None = None) -> None:
        super().__init__()
        self.current = current or ""

    def compose(self) -> ComposeResult:
        with Container(id="customer-dialog"):
            yield Static("Cliente", id="customer-title")
            yield Input(value=self.current, placeholder="Nombre y apellido", id="customer-name")
            yield Static(id="customer-error")

    def on_mount(self) -> None:
        self.query_one("#customer-name", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        name = event.value.strip()
        if not name:
            self.query_one("#customer-error", Static).update("El nombre del cliente es obligatorio.")
            return
        self.dismiss(name)

    def action_cancel(self) -> None:
        self.dismiss(None)
