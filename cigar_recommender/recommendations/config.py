from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RecommenderConfig:
    result_count: int = 3
    avoid_limit: int = 50
    # Serve a canned list instead of a 502 when the LLM call fails
    fallback_on_error: bool = _env_flag("RECOMMENDER_FALLBACK")
    shuffle: bool = True


DEFAULT_RECOMMENDER_CONFIG = RecommenderConfig()
