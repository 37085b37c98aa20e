from __future__ import annotations

import json
import logging
from typing import Any

from groq import Groq

from ..recommendations.errors import MissingAPIKeyError, UpstreamError
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)


def complete_json(
    system_prompt: str,
    user_prompt: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> dict[str, Any]:
    """
    Send one system/user prompt pair to Groq and return the decoded JSON object.

    Raises ``MissingAPIKeyError`` when no key is configured and
    ``UpstreamError`` when the API call itself fails. A reply that is not a
    JSON object decodes to an empty dict.
    """
    if not config.api_key:
        logger.error("Missing env var: GROQ_API_KEY")
        raise MissingAPIKeyError()

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content or "{}"
    except Exception as exc:
        logger.warning("Groq completion request failed", exc_info=True)
        raise UpstreamError() from exc

    try:
        parsed = json.loads(content)
    except ValueError:
        logger.warning("Groq reply was not valid JSON, treating it as empty")
        return {}

    return parsed if isinstance(parsed, dict) else {}
