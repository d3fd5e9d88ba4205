"""Main Textual app class."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from danclean.amount_modal import AmountModal
from danclean.api import ApiClient
from danclean.config import resolve_debug_log_path, resolve_time_zone
from danclean.customer_modal import CustomerModal
from danclean.data import search_catalog
from danclean.dates import get_current_date, load_zone
from danclean.labels import payment_method_label, payment_status_label
from danclean.models import CatalogItem, OrderPaymentMethod, OrderType, Role, User
from danclean.order_form import CheckoutSummary, OrderForm
from danclean.payment_modal import PaymentMethodModal
from danclean.rendering import (
    badge_style,
    format_checkout_status,
    format_cleaning_entry,
    format_greeting,
    format_money,
    format_quantity,
    format_summary,
)
from danclean.session import Loading, PageState, Ready, query_current_user, render_page_state_text
from danclean.totals import calculate_ironing_total, payment_status_for

CurrentUserQuery = Callable[[], PageState]


class DanCleanApp(App):
    """A Textual point-of-sale terminal for ironing and dry-cleaning orders."""

    TITLE = "Dan Clean"
    SUB_TITLE = "Punto de Venta"

    CSS = """
    Screen {
        layout: vertical;
    }

    #page-gate {
        height: auto;
        padding: 1 2;
    }

    #home {
        height: auto;
        padding: 0 2;
        margin-bottom: 1;
    }

    #main-layout {
        height: 1fr;
    }

    #form-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #summary-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #items-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_query = reactive("")
    selected_index = reactive(0)
    item_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next result"),
        ("up", "cycle_results(-1)", "Previous result"),
        ("down", "cycle_results(1)", "Next result"),
        ("enter", "register_selected", "Add garment"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("ctrl+s", "checkout", "Cobrar", priority=True),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, current_user_query: CurrentUserQuery | None = None, client: ApiClient | None = None) -> None:
        super().__init__()
        # Fail before the UI starts rather than after the user has loaded.
        self.time_zone = resolve_time_zone()
        load_zone(self.time_zone)
        if current_user_query is None:
            api_client = client if client is not None else ApiClient()

            def current_user_query() -> PageState:
                return query_current_user(api_client)

        self._current_user_query = current_user_query
        self.page_state: PageState = Loading()
        self.page_message = ""
        self.form = OrderForm()
        self.last_checkout: CheckoutSummary | None = None
        self.system_status = ""
        self._debug_log_path = Path(resolve_debug_log_path())
        self._log_debug("app_init")

    def _log_debug(self, message: str) -> None:
        try:
            ts = datetime.now(timezone.utc).isoformat()
            self._debug_log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._debug_log_path.open("a", encoding="utf-8") as fh:
                fh.write(f"{ts} {message}\n")
        except OSError:
            # Logging must never interfere with app flow.
            return

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="page-gate")
        yield Static(id="home")
        with Horizontal(id="main-layout"):
            with Vertical(id="form-pane"):
                yield Static("Punto de Venta", classes="pane-title")
                yield Static(id="search-bar")
                yield Static(id="results")
                yield Static("(sin prendas)", id="items-list")
            with Vertical(id="summary-pane"):
                yield Static("Resumen", classes="pane-title")
                yield Static(id="summary")

    def on_mount(self) -> None:
        self._apply_page_state(Loading())
        self.run_worker(self._load_current_user, thread=True, exclusive=True, group="current-user")

    def _load_current_user(self) -> None:
        state = self._current_user_query()
        self.call_from_thread(self._apply_page_state, state)

    def _apply_page_state(self, state: PageState) -> None:
        self.page_state = state
        self._log_debug(f"page_state state={type(state).__name__}")
        try:
            gate = self.query_one("#page-gate", Static)
            home = self.query_one("#home", Static)
            layout = self.query_one("#main-layout", Horizontal)
        except NoMatches:
            return

        if isinstance(state, Ready):
            gate.display = False
            layout.display = True
            if state.user.role is Role.ADMIN:
                home.display = True
                home_text = self._render_home(state.user)
                self.page_message = home_text.plain
                home.update(home_text)
            else:
                # Only admins get the home page; everyone else lands on the counter.
                home.display = False
                self.page_message = self.SUB_TITLE
            self._refresh_all()
            return

        gate.display = True
        home.display = False
        layout.display = False
        gate_text = render_page_state_text(state, self._render_home)
        self.page_message = gate_text.plain
        gate.update(gate_text)

    def _render_home(self, user: User) -> Text:
        text = format_greeting(user)
        business_day = get_current_date(self.time_zone)
        text.append(f"\nJornada: {business_day.date().isoformat()}", style="dim")
        return text

    def _is_ready(self) -> bool:
        return isinstance(self.page_state, Ready)

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def on_key(self, event: Key) -> None:
        if self._modal_open() or not self._is_ready():
            return

        self._log_debug(
            f"on_key key={event.key!r} char={event.character!r} printable={event.is_printable} state={self.input_state!r}"
        )

        if not event.is_printable or event.character is None or len(event.character) != 1:
            return
        if self.input_state == "active":
            if event.character.isprintable():
                self.search_query += event.character
                self.selected_index = 0
                self._refresh_search()
                event.stop()
            return

        if not event.character.isalnum():
            return

        key = event.character.lower()
        handlers: dict[str, Callable[[], None]] = {
            "n": self._prompt_customer,
            "c": self._start_cleaning_search,
            "i": self._prompt_ironing_quantity,
            "p": self._prompt_payment_method,
            "d": self._delete_selected_item,
            "x": self._reset_form,
            "j": lambda: self._move_item_selection(1),
            "k": lambda: self._move_item_selection(-1),
        }
        handler = handlers.get(key)
        if handler is None:
            return
        handler()
        event.stop()

    def action_cancel_active_mode(self) -> None:
        if self._modal_open():
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_search()

    def action_cycle_results(self, delta: int) -> None:
        if self._modal_open():
            return
        if self.input_state != "active":
            return

        results = self._filtered_results()
        if not results:
            self.selected_index = 0
            self._refresh_results(results)
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_register_selected(self) -> None:
        if self._modal_open():
            return
        if self.input_state != "active":
            return

        results = self._filtered_results()
        if not results:
            return

        item = results[self.selected_index]
        self.push_screen(
            AmountModal(
                f"Cantidad: {item.name} ({format_money(item.price)} c/u)",
                preview=lambda quantity: f"Subtotal: {format_money(quantity * item.price)}",
            ),
            callback=lambda quantity: self._add_cleaning_item(item, quantity),
        )

    def action_backspace_query(self) -> None:
        if self._modal_open():
            return
        if self.input_state != "active":
            return

        if not self.search_query:
            return
        self.search_query = self.search_query[:-1]
        self.selected_index = 0
        self._refresh_search()

    def action_checkout(self) -> None:
        self._log_debug(
            f"checkout_enter state={self.input_state!r} type={self.form.order_type!r} screen={type(self.screen).__name__}"
        )
        if self._modal_open() or not self._is_ready():
            self._log_debug("checkout_blocked reason=not_ready")
            return
        if self.input_state != "normal":
            self.system_status = "Cobrar solo fuera de la búsqueda (Ctrl+C para salir)"
            self._refresh_search()
            self._log_debug("checkout_blocked reason=not_normal")
            return
        method = self.form.payment_method
        if method is None or not self.form.is_complete():
            self.system_status = self._incomplete_reason()
            self._refresh_search()
            self._log_debug("checkout_blocked reason=incomplete")
            return

        total = self.form.calculate_total()
        is_cash = method is OrderPaymentMethod.CASH
        self.push_screen(
            AmountModal(
                f"Monto recibido: total {format_money(total)} ({payment_method_label(method)})",
                min_value=0,
                max_value=None if is_cash else int(total),
                initial=int(total),
                preview=lambda amount: self._payment_preview(total, amount, is_cash),
            ),
            callback=self._complete_checkout,
        )

    def _payment_preview(self, total: float, amount: int, is_cash: bool) -> str:
        line = payment_status_label(payment_status_for(total, amount))
        if is_cash and amount > total:
            line += f", cambio {format_money(amount - total)}"
        elif amount < total:
            line += f", resta {format_money(total - amount)}"
        return line

    def _complete_checkout(self, amount: int | None) -> None:
        if amount is None:
            self.system_status = "Cobro cancelado"
            self._refresh_search()
            return
        try:
            summary = self.form.checkout(amount)
        except ValueError as exc:
            self.system_status = str(exc)
            self._refresh_search()
            self._log_debug(f"checkout_blocked reason=invalid_amount amount={amount}")
            return

        self._log_debug(
            f"checkout_done type={summary.order_type.value} garments={summary.garment_count}"
            f" total={summary.total} paid={summary.total_paid} method={summary.payment_method.value}"
            f" payment_status={summary.payment_status.value}"
        )
        self.last_checkout = summary
        self.system_status = format_checkout_status(summary)
        self.form.reset()
        self.item_selected_index = None
        self._refresh_all()

    def _incomplete_reason(self) -> str:
        if self.form.customer is None:
            return "Captura el cliente (N)"
        if self.form.order_type is None:
            return "Elige el tipo de orden (C tintorería / I planchado)"
        if self.form.garment_count() <= 0:
            return "Nada que cobrar"
        return "Elige el método de pago (P)"

    def _start_cleaning_search(self) -> None:
        if self.form.order_type is not OrderType.CLEANING:
            self.form.set_order_type(OrderType.CLEANING)
            self.item_selected_index = None
            self._refresh_items()
            self._refresh_summary()
        self.input_state = "active"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_search()

    def _prompt_ironing_quantity(self) -> None:
        if self.form.order_type is not OrderType.IRONING:
            self.form.set_order_type(OrderType.IRONING)
            self.item_selected_index = None
            self._refresh_all()
        self.push_screen(
            AmountModal(
                "Piezas de planchado",
                initial=self.form.ironing_quantity,
                preview=lambda quantity: f"Subtotal: {format_money(calculate_ironing_total(quantity))}",
            ),
            callback=self._set_ironing_quantity,
        )

    def _prompt_customer(self) -> None:
        self.push_screen(CustomerModal(self.form.customer), callback=self._set_customer)

    def _prompt_payment_method(self) -> None:
        self.push_screen(PaymentMethodModal(self.form.payment_method), callback=self._set_payment_method)

    def _set_customer(self, name: str | None) -> None:
        if name is None:
            return
        self.form.set_customer(name)
        self._log_debug("customer_set")
        self._refresh_summary()

    def _set_ironing_quantity(self, quantity: int | None) -> None:
        if quantity is None:
            return
        self.form.set_ironing_quantity(quantity)
        self._log_debug(f"ironing_quantity quantity={quantity}")
        self._refresh_all()

    def _set_payment_method(self, method: OrderPaymentMethod | None) -> None:
        if method is None:
            return
        self.form.set_payment_method(method)
        self._log_debug(f"payment_method method={method.value}")
        self._refresh_summary()

    def _add_cleaning_item(self, item: CatalogItem, quantity: int | None) -> None:
        if quantity is None:
            return
        self.form.add_cleaning_item(item.name, quantity, item.price)
        self.item_selected_index = len(self.form.cleaning_items) - 1
        self._log_debug(f"cleaning_item_added item={item.item_id} quantity={quantity}")
        self._refresh_items()
        self._refresh_summary()

    def _reset_form(self) -> None:
        self.form.reset()
        self.item_selected_index = None
        self.system_status = "Orden descartada"
        self._refresh_all()

    def _filtered_results(self) -> list[CatalogItem]:
        return search_catalog(self.search_query)

    def _refresh_all(self) -> None:
        self._refresh_items()
        self._refresh_search()
        self._refresh_summary()

    def _move_item_selection(self, delta: int) -> None:
        items = self.form.cleaning_items
        if not items:
            return

        if self.item_selected_index is None:
            self.item_selected_index = 0 if delta > 0 else len(items) - 1
        else:
            self.item_selected_index = (self.item_selected_index + delta) % len(items)
        self._refresh_items()

    def _delete_selected_item(self) -> None:
        items = self.form.cleaning_items
        if not items or self.item_selected_index is None:
            return

        idx = self.item_selected_index
        if not (0 <= idx < len(items)):
            self.item_selected_index = None
            self._refresh_items()
            return

        self.form.remove_cleaning_item(items[idx].entry_id)

        if not self.form.cleaning_items:
            self.item_selected_index = None
        else:
            self.item_selected_index = min(idx, len(self.form.cleaning_items) - 1)

        self._refresh_items()
        self._refresh_summary()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_items(self) -> None:
        try:
            items_widget = self.query_one("#items-list", Static)
        except NoMatches:
            return

        if self.form.order_type is OrderType.IRONING:
            quantity = self.form.ironing_quantity or 0
            text = Text()
            text.append(" I ", style=badge_style(OrderType.IRONING))
            text.append(f" {format_quantity(quantity)} piezas de planchado")
            items_widget.update(text)
            return

        items = self.form.cleaning_items
        if not items:
            self.item_selected_index = None
            items_widget.update("(sin prendas)")
            return

        if self.item_selected_index is not None and self.item_selected_index >= len(items):
            self.item_selected_index = len(items) - 1

        visible_rows = self._visible_rows(items_widget)
        start, end = self._window_bounds(len(items), visible_rows, self.item_selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")

            pointer = "➤ " if idx == self.item_selected_index else "  "
            lines.append(pointer)
            lines.append(f"{idx + 1}. ")
            lines.append_text(format_cleaning_entry(items[idx]))

        if end < len(items):
            lines.append("\n⋮", style="dim")

        items_widget.update(lines)

    def _refresh_summary(self) -> None:
        try:
            summary = self.query_one("#summary", Static)
        except NoMatches:
            return
        summary.update(format_summary(self.form))

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        if self.input_state == "normal":
            self._refresh_results([])
            return
        self._refresh_results(self._filtered_results())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            status = self.system_status or "Listo"
            bar.update(f"N cliente, C tintorería, I planchado, P pago, X descartar. Ctrl+S cobrar.\n{status}")
            return

        text = Text()
        text.append(" C ", style=badge_style(OrderType.CLEANING))
        text.append(f": {self.search_query}")
        bar.update(text)

    def _refresh_results(self, results: list[CatalogItem]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            results_widget.update("")
            return

        if not results:
            results_widget.update("Sin resultados")
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        visible_rows = self._visible_rows(results_widget)
        start, end = self._window_bounds(len(results), visible_rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(f"{pointer}{results[idx].name}  {format_money(results[idx].price)}")

        if end < len(results):
            lines.append("\n⋮", style="dim")

        results_widget.update(lines)
