from __future__ import annotations

import logging
import random
from typing import Any

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import complete_json
from .config import DEFAULT_RECOMMENDER_CONFIG, RecommenderConfig
from .errors import InvalidInputError, UpstreamError
from .market_filter import filter_for_us_market
from .models import CigarRecommendation, RecommendResponse
from .normalize import clean_item, dedupe, drop_avoided, pad_to, shuffle
from .prompts import build_system_prompt, build_user_prompt
from .retail import build_retail_urls

logger = logging.getLogger(__name__)

# Served when the LLM is down and fallback mode is on
FALLBACK_RECOMMENDATIONS: list[dict[str, Any]] = [
    {
        "name": "Hemingway Short Story",
        "brand": "Arturo Fuente",
        "origin": "Dominican Republic",
        "priceRange": "$$",
        "strength": 5,
        "flavorNotes": ["cedar", "almond", "sweet cream"],
    },
    {
        "name": "Serie V Melanio",
        "brand": "Oliva",
        "origin": "Nicaragua",
        "priceRange": "$$$",
        "strength": 6,
        "flavorNotes": ["dark chocolate", "leather", "black pepper"],
    },
    {
        "name": "1964 Anniversary Maduro",
        "brand": "Padrón",
        "origin": "Nicaragua",
        "priceRange": "$$$$",
        "strength": 7,
        "flavorNotes": ["cocoa", "espresso", "earth"],
    },
    {
        "name": "Le Bijou 1922",
        "brand": "My Father",
        "origin": "Nicaragua",
        "priceRange": "$$$",
        "strength": 8,
        "flavorNotes": ["black cherry", "pepper", "oak"],
    },
]


def _market_metadata(raw: Any, cleaned: dict[str, Any]) -> dict[str, Any]:
    meta: dict[str, Any] = {
        "brand": cleaned.get("brand", ""),
        "name": cleaned.get("name", ""),
    }
    if isinstance(raw, dict):
        for key in ("origin", "country", "brand_owner", "factory"):
            value = raw.get(key)
            if value and isinstance(value, str):
                meta[key] = value
    return meta


def _fetch_raw_items(
    cigar: str,
    avoid: list[str],
    config: RecommenderConfig,
    llm_config: LLMConfig,
    rng: random.Random,
) -> list[Any]:
    seed = rng.randrange(1_000_000)
    system_prompt = build_system_prompt(avoid, seed, count=config.result_count)
    user_prompt = build_user_prompt(cigar, count=config.result_count)

    try:
        parsed = complete_json(system_prompt, user_prompt, config=llm_config)
    except UpstreamError:
        if not config.fallback_on_error:
            raise
        logger.warning("LLM unavailable, serving fallback recommendations")
        return list(FALLBACK_RECOMMENDATIONS)

    items = parsed.get("recommendations")
    return items if isinstance(items, list) else []


def get_recommendations(
    cigar: str,
    avoid: list[str] | None = None,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
    llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
    rng: random.Random | None = None,
) -> RecommendResponse:
    """
    Ask the LLM for cigars similar to ``cigar`` and shape its answer.

    Pipeline: prompt -> LLM -> clean -> drop avoided -> US-market filter
    -> dedupe -> shuffle -> pad to ``config.result_count`` -> retail links.
    """
    cigar = (cigar or "").strip()
    if not cigar:
        raise InvalidInputError()

    avoid = [a for a in (avoid or []) if a][: config.avoid_limit]
    rng = rng or random.Random()

    raw_items = _fetch_raw_items(cigar, avoid, config, llm_config, rng)

    cleaned: list[dict[str, Any]] = []
    for raw in raw_items:
        item = clean_item(raw)
        if not item.get("name"):
            continue
        item["metadata"] = _market_metadata(raw, item)
        cleaned.append(item)

    cleaned = drop_avoided(cleaned, avoid)
    us_only = [
        {k: v for k, v in it.items() if k != "metadata"}
        for it in filter_for_us_market(cleaned)
    ]
    us_only = dedupe(us_only)
    if config.shuffle:
        us_only = shuffle(us_only, rng)

    final = pad_to(us_only, config.result_count)
    logger.info("US filter summary: input=%d output=%d", len(cleaned), len(us_only))

    return RecommendResponse(
        recommendations=[
            CigarRecommendation.model_validate({**it, "urls": build_retail_urls(it)})
            for it in final
        ]
    )
