from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRICE_TIERS = ["$", "$$", "$$$", "$$$$"]


class RecommendRequest(BaseModel):
    cigar: str = Field(default="", description="Cigar the user already enjoys")
    avoid: list[str] = Field(
        default_factory=list,
        description="Recently shown cigar names the model must not repeat",
    )

    @field_validator("cigar", mode="before")
    @classmethod
    def _coerce_cigar(cls, value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @field_validator("avoid", mode="before")
    @classmethod
    def _coerce_avoid(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(v).strip() for v in value if v and str(v).strip()]


class RetailLink(BaseModel):
    label: str
    url: str


class CigarRecommendation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    brand: str = ""
    price_range: str | None = Field(default=None, alias="priceRange")
    strength: int = Field(default=5, ge=1, le=10)
    flavor_notes: list[str] = Field(default_factory=list, alias="flavorNotes")
    urls: list[RetailLink] = Field(default_factory=list)


class RecommendResponse(BaseModel):
    recommendations: list[CigarRecommendation]


class ErrorResponse(BaseModel):
    error: str
