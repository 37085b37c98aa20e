"""
US-market exclusion filter.

A record is dropped only when we are confident it is a Cuban product.
Brands sold under the same name by both the Cuban and the non-Cuban
companies stay in unless a Cuban factory or line name gives them away.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DUAL_MARKET_BRANDS = [
    "cohiba",
    "montecristo",
    "romeo y julieta",
    "h. upmann",
    "h upmann",
    "partagás",
    "partagas",
    "trinidad",
    "bolivar",
    "punch",
    "ramon allones",
    "quai d'orsay",
]

CUBAN_HINTS = ["el laguito", "partagas factory", "la corona", "habana", "habano"]

_HABANA_RE = re.compile(r"habana|habano", re.IGNORECASE)


def _field(meta: Mapping[str, Any], *keys: str) -> str:
    """First non-empty value among ``keys``, trimmed and lower-cased."""
    for key in keys:
        value = meta.get(key)
        if value:
            return value.strip().lower()
    return ""


def is_cuban(meta: Mapping[str, Any] | None = None) -> bool:
    meta = meta or {}
    origin = _field(meta, "origin", "country", "country_of_origin")
    owner = _field(meta, "brand_owner", "owner")
    factory = _field(meta, "factory")
    brand = _field(meta, "brand")
    name = _field(meta, "name", "line")

    if origin in ("cuba", "cu"):
        return True
    # Habanos S.A. is the Cuban state distributor
    if "habanos" in owner:
        return True

    if any(b in brand for b in DUAL_MARKET_BRANDS):
        if origin:
            return False
        return any(h in factory or h in name for h in CUBAN_HINTS)

    return bool(_HABANA_RE.search(name))


def filter_for_us_market(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Drop records whose ``metadata`` classifies as Cuban.

    Fails open: any classification error keeps the full input list.
    """
    try:
        return [r for r in records if not is_cuban(r.get("metadata") or {})]
    except Exception:
        logger.error("Market filter error, keeping all records", exc_info=True)
        return list(records)
