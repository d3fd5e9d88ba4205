"""Rendering helpers for order rows and the summary pane."""

from __future__ import annotations

from rich.text import Text

from danclean.labels import order_type_label, payment_method_label, payment_status_label
from danclean.models import CleaningEntry, OrderType, User
from danclean.order_form import CheckoutSummary, OrderForm


def badge_style(order_type: OrderType) -> str:
    """Return a consistent badge style for order type tags."""
    if order_type is OrderType.IRONING:
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def format_money(amount: float) -> str:
    return f"${amount:,.2f}"


def format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"


def format_cleaning_entry(entry: CleaningEntry) -> Text:
    """Render a cleaning row as ``<qty> x <name>  @ <price>  = <subtotal>``."""
    text = Text()
    text.append(f"{format_quantity(entry.quantity)} x ", style="bold")
    text.append(entry.item_name)
    text.append(f"  @ {format_money(entry.price)}", style="dim")
    text.append(f"  = {format_money(entry.quantity * entry.price)}")
    return text


def format_order_type_tag(order_type: OrderType | None) -> Text:
    text = Text()
    if order_type is None:
        text.append("Sin tipo", style="dim")
        return text
    text.append(f" {order_type_label(order_type)} ", style=badge_style(order_type))
    return text


def format_summary(form: OrderForm) -> Text:
    """Render the customer, running total, garment count and payment method of a form."""
    text = Text()
    text.append("Cliente: ")
    if form.customer is None:
        text.append("(sin capturar)", style="dim")
    else:
        text.append(form.customer)
    text.append("\nTipo: ")
    text.append_text(format_order_type_tag(form.order_type))
    text.append(f"\nPrendas: {format_quantity(form.garment_count())}")
    text.append("\nPago: ")
    if form.payment_method is None:
        text.append("(sin seleccionar)", style="dim")
    else:
        text.append(payment_method_label(form.payment_method))
    text.append("\nTotal: ")
    text.append(format_money(form.calculate_total()), style="bold")
    return text


def format_checkout_status(summary: CheckoutSummary) -> str:
    """One-line receipt for the status bar, e.g. ``Ana: Cobrado $154.00 de $154.00 (Tarjeta) Pagado``."""
    line = (
        f"Cobrado {format_money(summary.total_paid)} de {format_money(summary.total)}"
        f" ({payment_method_label(summary.payment_method)}) {payment_status_label(summary.payment_status)}"
    )
    if summary.change:
        line += f", cambio {format_money(summary.change)}"
    return f"{summary.customer}: {line}"


def format_greeting(user: User) -> Text:
    text = Text()
    text.append("Dan Clean App", style="bold")
    text.append(f"\nBienvenido, {user.full_name or user.email}")
    text.append(f" ({user.role.value})", style="dim")
    return text
