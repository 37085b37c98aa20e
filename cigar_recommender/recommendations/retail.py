from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

# Label -> search URL prefix, in display order
RETAILERS: list[tuple[str, str]] = [
    ("Famous Smoke", "https://www.famous-smoke.com/search?query="),
    ("Cigars International", "https://www.cigarsinternational.com/search/?q="),
    ("JR Cigars", "https://www.jrcigars.com/search/?q="),
]


def build_retail_urls(item: Mapping[str, Any]) -> list[dict[str, str]]:
    """Search links for ``"brand name"`` at every retailer."""
    query = f"{item.get('brand') or ''} {item.get('name') or ''}".strip()
    encoded = quote(query, safe="-_.!~*'()")
    return [{"label": label, "url": f"{prefix}{encoded}"} for label, prefix in RETAILERS]
