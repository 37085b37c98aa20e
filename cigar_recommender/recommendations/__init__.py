"""
Cigar recommendation engine.

Responsibilities:
- Turn a cigar name and an avoid list into an LLM prompt pair.
- Clean and clamp whatever the model returns into fixed-shape records.
- Drop Cuban-market products so every result is sold in the US market.
- Guarantee exactly three recommendations per response.
"""
