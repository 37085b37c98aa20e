from __future__ import annotations

import random
import re
from typing import Any, Iterable, Mapping

from .models import PRICE_TIERS

ALLOWED_FIELDS = ("name", "brand", "priceRange", "strength", "flavorNotes")

PLACEHOLDER = {
    "name": "TBD",
    "brand": "",
    "priceRange": "$$",
    "strength": 5,
    "flavorNotes": [],
}

_PREFIX_RES = [
    re.compile(r"^why similar:\s*", re.IGNORECASE),
    re.compile(r"^key differences?:\s*", re.IGNORECASE),
]
_BOILERPLATE_RES = [
    re.compile(r"^why\s+similar", re.IGNORECASE),
    re.compile(r"^key\s+differences?", re.IGNORECASE),
]
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def strip_boilerplate(value: Any) -> str:
    """Remove the "Why Similar:" / "Key Differences:" lead-ins models like to add."""
    text = str(value) if value else ""
    for prefix in _PREFIX_RES:
        text = prefix.sub("", text)
    return text.strip()


def clean_flavor_notes(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    notes = [strip_boilerplate(v) for v in value]
    return [n for n in notes if n and not any(rx.match(n) for rx in _BOILERPLATE_RES)]


def clamp_strength(value: Any, low: int = 1, high: int = 10, default: int = 5) -> int:
    """Parse the leading integer of ``value`` and clamp it into [low, high]."""
    match = _LEADING_INT_RE.match(str(value))
    parsed = int(match.group(1)) if match else 0
    return max(low, min(high, parsed or default))


def normalize_price_range(value: Any) -> str | None:
    """Map a model price label onto the $ .. $$$$ scale, or ``None``."""
    text = strip_boilerplate(value)
    if text in PRICE_TIERS:
        return text
    dollars = text.count("$")
    if dollars:
        return PRICE_TIERS[min(dollars, len(PRICE_TIERS)) - 1]
    return None


def clean_item(raw: Any) -> dict[str, Any]:
    """Rebuild one model item from the allowed fields only."""
    if not isinstance(raw, Mapping):
        return {}

    out: dict[str, Any] = {}
    if raw.get("name") is not None:
        out["name"] = strip_boilerplate(raw["name"])
    if raw.get("brand") is not None:
        out["brand"] = strip_boilerplate(raw["brand"])
    if raw.get("priceRange") is not None:
        out["priceRange"] = normalize_price_range(raw["priceRange"])
    out["strength"] = clamp_strength(raw.get("strength"))
    out["flavorNotes"] = clean_flavor_notes(raw.get("flavorNotes"))
    return {k: v for k, v in out.items() if k in ALLOWED_FIELDS}


def drop_avoided(items: Iterable[dict[str, Any]], avoid: Iterable[str]) -> list[dict[str, Any]]:
    avoid_set = {a.strip().lower() for a in avoid if a}
    if not avoid_set:
        return list(items)
    return [it for it in items if str(it.get("name", "")).lower() not in avoid_set]


def dedupe(items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep the first item for every (name, brand) pair, case-insensitively."""
    seen: set[tuple[str, str]] = set()
    out: list[dict[str, Any]] = []
    for it in items:
        key = (str(it.get("name", "")).lower(), str(it.get("brand", "")).lower())
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out


def shuffle(items: list[dict[str, Any]], rng: random.Random | None = None) -> list[dict[str, Any]]:
    shuffled = list(items)
    (rng or random).shuffle(shuffled)
    return shuffled


def pad_to(items: list[dict[str, Any]], count: int = 3) -> list[dict[str, Any]]:
    """Truncate or pad with placeholders so exactly ``count`` items come back."""
    final = list(items[:count])
    while len(final) < count:
        final.append({**PLACEHOLDER, "flavorNotes": []})
    return final
