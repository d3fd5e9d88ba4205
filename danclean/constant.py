"""Editable static catalog, pricing and label configuration."""

from __future__ import annotations

DEFAULT_CLEANING_PRICE = 10.0

IRONING_PRICE_PER_ITEM = 14
IRONING_DISCOUNT_EVERY = 12
# Each group of 12 pieces costs 140 instead of 168.
IRONING_GROUP_PRICE = 140

# Canonical garment metadata consumed by danclean.data (which wraps these into CatalogItem instances).
CLEANING_ITEM_META_BY_ID: dict[str, dict[str, str | float | list[str] | None]] = {
    "vestido": {"display_name": "Vestido", "aliases": ["vest", "dress"], "price": 10.0},
    "traje": {"display_name": "Traje", "aliases": ["suit", "tr"], "price": 15.0},
    "saco": {"display_name": "Saco", "aliases": ["blazer"], "price": None},
    "pantalon": {"display_name": "Pantalón", "aliases": ["pantalon", "pants", "pt"], "price": None},
    "camisa": {"display_name": "Camisa", "aliases": ["shirt", "cm"], "price": None},
    "falda": {"display_name": "Falda", "aliases": ["skirt"], "price": None},
    "abrigo": {"display_name": "Abrigo", "aliases": ["coat"], "price": None},
    "edredon": {"display_name": "Edredón", "aliases": ["edredon", "ed"], "price": None},
    "cobija": {"display_name": "Cobija", "aliases": ["blanket"], "price": None},
    "otro": {"display_name": "Otro", "aliases": ["other"], "price": None},
}

PAYMENT_METHOD_LABEL_TEXT: dict[str, str] = {
    "CASH": "Efectivo",
    "CARD": "Tarjeta",
    "TRANSFER": "Transferencia",
}

PAYMENT_STATUS_LABEL_TEXT: dict[str, str] = {
    "PENDING": "Pendiente",
    "PAID": "Pagado",
    "PARTIALLY_PAID": "Pago Parcial",
    "CANCELLED": "Cancelado",
    "REFUNDED": "Reembolsado",
}

ORDER_STATUS_LABEL_TEXT: dict[str, str] = {
    "PENDING": "PENDIENTE",
    "COMPLETED": "COMPLETO",
    "CANCELLED": "CANCELADO",
    "DAMAGED": "DAÑADO",
    "LOST": "PERDIDO",
    "DELIVERED": "ENTREGADO",
}

ORDER_TYPE_LABEL_TEXT: dict[str, str] = {
    "IRONING": "Planchado",
    "CLEANING": "Tintorería",
}

UNKNOWN_STATUS_LABEL = "DESCONOCIDO"
