"""Whole-number entry modal for piece counts and amounts received."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

# Digit cap when the modal has no upper bound.
_UNBOUNDED_DIGITS = 7


class AmountModal(ModalScreen[int | None]):
    """Prompt for a bounded whole number, previewing what it is worth as it is typed.

    ``preview`` maps the current value to a line such as a subtotal or the
    change owed; it is only called for values inside the bounds.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancelar"),
        Binding("ctrl+c", "cancel", "Cancelar"),
        Binding("enter", "confirm", "Aceptar"),
        Binding("backspace", "delete_digit", "Borrar"),
        Binding("up,plus", "step(1)", "+1"),
        Binding("down,minus", "step(-1)", "-1"),
    ]

    CSS = """
    AmountModal {
        align: center middle;
        background: $background 60%;
    }

    #amount-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #amount-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #amount-value {
        border: heavy $secondary;
        padding: 0 1;
    }

    #amount-preview {
        margin: 1 0;
    }

    #amount-help {
        color: #dddddd;
    }
    """

    def __init__(
        self,
        title: str,
        *,
        min_value: int = 1,
        max_value: int | None = 999,
        initial: int | None = None,
        preview: Callable[[int], str] | None = None,
    ) -> None:
        super().__init__()
        if max_value is not None and max_value < min_value:
            raise ValueError("max_value must not be below min_value")
        self.heading = title
        self.min_value = min_value
        self.max_value = max_value
        self.preview = preview
        self.digits = str(initial) if initial is not None else ""
        self.error = ""

    @property
    def max_digits(self) -> int:
        if self.max_value is None:
            return _UNBOUNDED_DIGITS
        return len(str(self.max_value))

    @property
    def bounds_text(self) -> str:
        if self.max_value is None:
            return f"mínimo {self.min_value}"
        return f"de {self.min_value} a {self.max_value}"

    def compose(self) -> ComposeResult:
        with Container(id="amount-dialog"):
            yield Static(self.heading, id="amount-title")
            yield Static(id="amount-value")
            yield Static(id="amount-preview")
            yield Static(f"Dígitos ({self.bounds_text}). ↑/↓ ajusta, Enter acepta, Esc cancela.", id="amount-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if not (event.is_printable and event.character and event.character.isdigit()):
            return
        if len(self.digits) < self.max_digits:
            self.digits = (self.digits + event.character).lstrip("0") or "0"
        self.error = ""
        self._refresh_content()
        event.stop()

    def current_value(self) -> int | None:
        return int(self.digits) if self.digits else None

    def in_bounds(self, value: int) -> bool:
        if value < self.min_value:
            return False
        return self.max_value is None or value <= self.max_value

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_delete_digit(self) -> None:
        self.digits = self.digits[:-1]
        self.error = ""
        self._refresh_content()

    def action_step(self, delta: int) -> None:
        value = self.current_value()
        stepped = self.min_value if value is None else value + delta
        if self.in_bounds(stepped):
            self.digits = str(stepped)
            self.error = ""
        self._refresh_content()

    def action_confirm(self) -> None:
        value = self.current_value()
        if value is None:
            self.error = "Ingresa un valor."
        elif not self.in_bounds(value):
            self.error = f"El valor debe ser {self.bounds_text}."
        else:
            self.dismiss(value)
            return
        self._refresh_content()

    def _refresh_content(self) -> None:
        self.query_one("#amount-value", Static).update(self.digits or " ")

        line = Text()
        value = self.current_value()
        if self.error:
            line.append(self.error, style="#ffb3b3")
        elif value is not None and self.in_bounds(value) and self.preview is not None:
            line.append(self.preview(value), style="bold")
        self.query_one("#amount-preview", Static).update(line)
