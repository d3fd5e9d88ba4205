"""Static garment catalog and search helpers."""

from __future__ import annotations

from dataclasses import dataclass

from danclean.constant import CLEANING_ITEM_META_BY_ID as _CLEANING_ITEM_META_BY_ID_RAW
from danclean.constant import DEFAULT_CLEANING_PRICE
from danclean.models import CatalogItem


@dataclass(frozen=True)
class GarmentMeta:
    """Canonical text and price metadata for a garment."""

    display_name: str
    aliases: list[str]
    price: float


GARMENT_META_BY_ID: dict[str, GarmentMeta] = {
    item_id: GarmentMeta(
        display_name=str(meta["display_name"]),
        aliases=list(meta["aliases"]),  # type: ignore[arg-type]
        price=float(meta["price"]) if meta["price"] is not None else DEFAULT_CLEANING_PRICE,  # type: ignore[arg-type]
    )
    for item_id, meta in _CLEANING_ITEM_META_BY_ID_RAW.items()
}


def price_for_garment(item_id: str) -> float:
    """Unit cleaning price for a garment id; unknown garments use the default price."""
    meta = GARMENT_META_BY_ID.get(item_id)
    if meta is None:
        return DEFAULT_CLEANING_PRICE
    return meta.price


CLEANING_CATALOG: list[CatalogItem] = [
    CatalogItem(item_id, meta.display_name, meta.price) for item_id, meta in GARMENT_META_BY_ID.items()
]


def search_catalog(query: str, catalog: list[CatalogItem] | None = None) -> list[CatalogItem]:
    """Case-insensitive substring search over garment names and aliases."""
    source = CLEANING_CATALOG if catalog is None else catalog
    q = query.strip().lower()
    if not q:
        return list(source)

    results = []
    for item in source:
        meta = GARMENT_META_BY_ID.get(item.item_id)
        aliases = meta.aliases if meta is not None else []
        if q in item.name.lower() or any(q in alias.lower() for alias in aliases):
            results.append(item)
    return results
