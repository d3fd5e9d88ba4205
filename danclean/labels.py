"""Spanish display labels for payment methods, order statuses and order types."""

from __future__ import annotations

from enum import Enum
from typing import assert_never

from danclean.constant import (
    ORDER_STATUS_LABEL_TEXT,
    ORDER_TYPE_LABEL_TEXT,
    PAYMENT_METHOD_LABEL_TEXT,
    PAYMENT_STATUS_LABEL_TEXT,
    UNKNOWN_STATUS_LABEL,
)
from danclean.models import OrderPaymentMethod, OrderPaymentStatus, OrderStatus, OrderType


def _build_label_table(enum_cls: type[Enum], raw: dict[str, str]) -> dict:
    """Wrap a raw label table keyed by enum value, refusing a table that is not total."""
    members = {member.value for member in enum_cls}
    missing = members - raw.keys()
    extra = raw.keys() - members
    if missing or extra:
        raise RuntimeError(
            f"{enum_cls.__name__} label table out of sync: missing={sorted(missing)} extra={sorted(extra)}"
        )
    return {enum_cls(value): label for value, label in raw.items()}


PAYMENT_METHOD_LABELS: dict[OrderPaymentMethod, str] = _build_label_table(
    OrderPaymentMethod, PAYMENT_METHOD_LABEL_TEXT
)
PAYMENT_STATUS_LABELS: dict[OrderPaymentStatus, str] = _build_label_table(
    OrderPaymentStatus, PAYMENT_STATUS_LABEL_TEXT
)
ORDER_STATUS_LABELS: dict[OrderStatus, str] = _build_label_table(OrderStatus, ORDER_STATUS_LABEL_TEXT)
ORDER_TYPE_LABELS: dict[OrderType, str] = _build_label_table(OrderType, ORDER_TYPE_LABEL_TEXT)


def payment_method_label(method: OrderPaymentMethod) -> str:
    """Display label for a payment method."""
    match method:
        case OrderPaymentMethod.CASH:
            return PAYMENT_METHOD_LABELS[OrderPaymentMethod.CASH]
        case OrderPaymentMethod.CARD:
            return PAYMENT_METHOD_LABELS[OrderPaymentMethod.CARD]
        case OrderPaymentMethod.TRANSFER:
            return PAYMENT_METHOD_LABELS[OrderPaymentMethod.TRANSFER]
        case _:
            assert_never(method)


def translate_order_status(status: OrderStatus | str) -> str:
    """Display label for an order status; unknown raw values map to DESCONOCIDO."""
    try:
        return ORDER_STATUS_LABELS[OrderStatus(status)]
    except ValueError:
        return UNKNOWN_STATUS_LABEL


def order_type_label(order_type: OrderType) -> str:
    return ORDER_TYPE_LABELS[order_type]


def payment_status_label(status: OrderPaymentStatus) -> str:
    return PAYMENT_STATUS_LABELS[status]
