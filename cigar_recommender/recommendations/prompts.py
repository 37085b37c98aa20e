from __future__ import annotations

SYSTEM_PROMPT_TEMPLATE = """\
You are a cigar expert who replies ONLY with JSON.
Random seed: {seed}.
Always vary your recommendations - avoid repeating the same cigars if asked \
multiple times about the same input.
{avoid_line}
NEVER include fields named "why", "similarity", "differences", or any prose \
that starts with "Why Similar" or "Key Differences".
Return ONLY the following fields per item: name, brand, origin, priceRange, \
strength, flavorNotes.
Output exactly {count} unique recommendations. Ensure the {count} items span \
at least 2 different brands and, when possible, distinct regions or strength levels."""

USER_PROMPT_TEMPLATE = """\
Given the cigar "{cigar}", recommend EXACTLY {count} different cigars that \
someone who enjoys this cigar would also like.
Rules:
- Do not repeat any item from the AVOID list above (if present).
- Prefer a mix of brands/regions/strengths so results differ across calls.
Provide ONLY these fields:
1) name (string)
2) brand (string)
3) origin (country where the cigar is made)
4) priceRange ($, $$, $$$, or $$$$)
5) strength (1-10)
6) flavorNotes (array of 3-4 short notes)

Respond ONLY with a JSON object in this shape:
{{
  "recommendations": [
    {{
      "name": "string",
      "brand": "string",
      "origin": "string",
      "priceRange": "string",
      "strength": number,
      "flavorNotes": ["note1","note2","note3"]
    }}
  ]
}}"""


def build_system_prompt(avoid: list[str], seed: int, count: int = 3) -> str:
    avoid_line = (
        f"NEVER include any of these AVOID items: {'; '.join(avoid)}." if avoid else ""
    )
    return SYSTEM_PROMPT_TEMPLATE.format(seed=seed, avoid_line=avoid_line, count=count)


def build_user_prompt(cigar: str, count: int = 3) -> str:
    return USER_PROMPT_TEMPLATE.format(cigar=cigar, count=count)
