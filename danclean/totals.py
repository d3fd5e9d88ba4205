"""Order total and garment count calculators."""

from __future__ import annotations

from typing import Iterable

from danclean.constant import IRONING_DISCOUNT_EVERY, IRONING_GROUP_PRICE, IRONING_PRICE_PER_ITEM
from danclean.models import LineItem, OrderPaymentStatus, OrderType


def calculate_cleaning_total(items: Iterable[LineItem]) -> float:
    """Sum of quantity * price over all items, starting from 0.

    No validation is applied: negative quantities reduce the total and
    NaN or infinite values propagate through ordinary arithmetic.
    """
    return sum((item.quantity * item.price for item in items), 0)


def calculate_ironing_total(quantity: int) -> int:
    """Price an ironing order: every complete group of 12 pieces is billed at the group price."""
    if quantity <= 0:
        return 0

    complete_groups, remainder = divmod(quantity, IRONING_DISCOUNT_EVERY)
    return complete_groups * IRONING_GROUP_PRICE + remainder * IRONING_PRICE_PER_ITEM


def calculate_garment_count(order_type: OrderType, items: Iterable[LineItem] | int) -> float:
    """Total number of garments for an order of the given type."""
    if order_type is OrderType.IRONING:
        if isinstance(items, int):
            return items
        raise TypeError("ironing orders are counted from a quantity")
    if order_type is OrderType.CLEANING:
        if isinstance(items, int):
            raise TypeError("cleaning orders are counted from line items")
        return sum(item.quantity for item in items)
    return 0


def payment_status_for(total: float, amount_paid: float) -> OrderPaymentStatus:
    """Payment status of an order once ``amount_paid`` has been received against ``total``."""
    if amount_paid >= total:
        return OrderPaymentStatus.PAID
    if amount_paid > 0:
        return OrderPaymentStatus.PARTIALLY_PAID
    return OrderPaymentStatus.PENDING
