"""Payment method picker modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from danclean.labels import payment_method_label
from danclean.models import OrderPaymentMethod


class PaymentMethodModal(ModalScreen[OrderPaymentMethod | None]):
    """Centered modal listing every payment method by its display label."""

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("q", "cancel", "Cancel"),
        ("ctrl+c", "cancel", "Cancel"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "choose_current", "Choose"),
    ]

    CSS = """
    PaymentMethodModal {
        align: center middle;
        background: $background 60%;
    }

    #payment-dialog {
        width: 48;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #payment-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #payment-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, current: OrderPaymentMethod | None = None) -> None:
        super().__init__()
        self.methods = list(OrderPaymentMethod)
        self.current = current

    def compose(self) -> ComposeResult:
        with Container(id="payment-dialog"):
            yield Static("Método de pago", id="payment-title")
            yield Static(id="payment-body")
            yield Static("J/K/↑/↓ mover, Enter elegir, Esc/q/Ctrl+C cancelar", id="payment-help")

    def on_mount(self) -> None:
        if self.current is not None:
            self.cursor_index = self.methods.index(self.current)
        self._refresh_content()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_move_cursor(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(self.methods)
        self._refresh_content()

    def action_choose_current(self) -> None:
        self.dismiss(self.methods[self.cursor_index])

    def _refresh_content(self) -> None:
        content = Text(style="white")
        for idx, method in enumerate(self.methods):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            checked = "(•)" if method is self.current else "( )"
            style = "bold white" if idx == self.cursor_index else "white"
            content.append(f"{pointer}{checked} {payment_method_label(method)}", style=style)
        self.query_one("#payment-body", Static).update(content)
