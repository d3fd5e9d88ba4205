"""In-memory state of the point-of-sale order form."""

from __future__ import annotations

from dataclasses import dataclass, field

from danclean.models import (
    CleaningEntry,
    LineItem,
    OrderPaymentMethod,
    OrderPaymentStatus,
    OrderStatus,
    OrderType,
)
from danclean.totals import (
    calculate_cleaning_total,
    calculate_garment_count,
    calculate_ironing_total,
    payment_status_for,
)


@dataclass(frozen=True)
class CheckoutSummary:
    """What the counter collected for one order."""

    order_type: OrderType
    customer: str
    garment_count: float
    total: float
    payment_method: OrderPaymentMethod
    payment_status: OrderPaymentStatus
    total_paid: float
    change: float
    status: OrderStatus = OrderStatus.PENDING


@dataclass
class OrderForm:
    """Order being assembled at the counter.

    Changing the order type clears the goods recorded for the previous type.
    """

    customer: str | None = None
    order_type: OrderType | None = None
    ironing_quantity: int | None = None
    cleaning_items: list[CleaningEntry] = field(default_factory=list)
    payment_method: OrderPaymentMethod | None = None

    def set_customer(self, name: str | None) -> None:
        """Set the customer name; a blank name clears it."""
        name = (name or "").strip()
        self.customer = name or None

    def set_order_type(self, order_type: OrderType | None) -> None:
        self.order_type = order_type
        self.ironing_quantity = None
        self.cleaning_items = []

    def set_ironing_quantity(self, quantity: int | None) -> None:
        if quantity is not None and quantity < 0:
            raise ValueError("ironing quantity cannot be negative")
        self.ironing_quantity = quantity

    def add_cleaning_item(self, item_name: str, quantity: float, price: float) -> CleaningEntry:
        if not item_name.strip():
            raise ValueError("item_name is required")
        entry = CleaningEntry(item_name=item_name, quantity=quantity, price=price)
        self.cleaning_items.append(entry)
        return entry

    def remove_cleaning_item(self, entry_id: str) -> None:
        remaining = [entry for entry in self.cleaning_items if entry.entry_id != entry_id]
        if len(remaining) == len(self.cleaning_items):
            raise KeyError(entry_id)
        self.cleaning_items = remaining

    def update_cleaning_item(
        self,
        entry_id: str,
        *,
        item_name: str | None = None,
        quantity: float | None = None,
        price: float | None = None,
    ) -> CleaningEntry:
        entry = self.find_cleaning_item(entry_id)
        if item_name is not None:
            entry.item_name = item_name
        if quantity is not None:
            entry.quantity = quantity
        if price is not None:
            entry.price = price
        return entry

    def find_cleaning_item(self, entry_id: str) -> CleaningEntry:
        for entry in self.cleaning_items:
            if entry.entry_id == entry_id:
                return entry
        raise KeyError(entry_id)

    def set_payment_method(self, method: OrderPaymentMethod | None) -> None:
        self.payment_method = method

    def reset(self) -> None:
        self.customer = None
        self.order_type = None
        self.ironing_quantity = None
        self.cleaning_items = []
        self.payment_method = None

    def line_items(self) -> list[LineItem]:
        return [entry.as_line_item() for entry in self.cleaning_items]

    def calculate_total(self) -> float:
        if self.order_type is OrderType.IRONING and self.ironing_quantity:
            return calculate_ironing_total(self.ironing_quantity)
        if self.order_type is OrderType.CLEANING and self.cleaning_items:
            return calculate_cleaning_total(self.line_items())
        return 0

    def garment_count(self) -> float:
        if self.order_type is OrderType.IRONING:
            return calculate_garment_count(OrderType.IRONING, self.ironing_quantity or 0)
        if self.order_type is OrderType.CLEANING:
            return calculate_garment_count(OrderType.CLEANING, self.line_items())
        return 0

    def is_complete(self) -> bool:
        """True once the order has a customer, a type, some goods and a payment method."""
        if self.customer is None or self.payment_method is None:
            return False
        if self.order_type is OrderType.IRONING:
            return bool(self.ironing_quantity)
        if self.order_type is OrderType.CLEANING:
            return bool(self.cleaning_items)
        return False

    def checkout(self, amount_paid: float) -> CheckoutSummary:
        """Settle the order against the amount received.

        Cash may be overpaid and the difference is returned as change; card
        and transfer payments cannot exceed the total. Paying less than the
        total leaves the order partially paid or pending.
        """
        if not self.is_complete():
            raise ValueError("order is incomplete")
        if amount_paid < 0:
            raise ValueError("El monto no puede ser negativo")

        total = self.calculate_total()
        is_cash = self.payment_method is OrderPaymentMethod.CASH
        if not is_cash and amount_paid > total:
            raise ValueError("El monto pagado no puede exceder el total")

        return CheckoutSummary(
            order_type=self.order_type,
            customer=self.customer,
            garment_count=self.garment_count(),
            total=total,
            payment_method=self.payment_method,
            payment_status=payment_status_for(total, amount_paid),
            total_paid=min(amount_paid, total),
            change=amount_paid - total if is_cash and amount_paid > total else 0,
        )
