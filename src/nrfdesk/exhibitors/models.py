"""Exhibitor data models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from nrfdesk.core.types import CategoryTag, FacetCount


class ExhibitorRecord(BaseModel):
    """A scraped exhibitor row. Read-only from the application's side."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    country: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    website_url: str | None = None
    linkedin_url: str | None = None
    booth: str | None = None
    company_info: str | None = None
    activities: str | None = None
    target_markets: str | None = None
    press_release: str | None = None
    crawled_at: datetime | None = None


class ComputedFields(BaseModel):
    """Flags derived from an exhibitor's text. Never persisted."""

    model_config = ConfigDict(frozen=True)

    is_france: bool
    category_tag: CategoryTag
    pants_candidate: bool


class ClassifiedExhibitor(ExhibitorRecord):
    """An exhibitor record together with its computed flags."""

    is_france: bool
    category_tag: CategoryTag
    pants_candidate: bool
    lead_score: int = 0

    @classmethod
    def from_record(
        cls, record: ExhibitorRecord, computed: ComputedFields, lead_score: int = 0
    ) -> ClassifiedExhibitor:
        return cls(**record.model_dump(), **computed.model_dump(), lead_score=lead_score)


class ExhibitorQuery(BaseModel):
    """Filters for the exhibitor listing.

    ``category``, ``france_only`` and ``candidate`` act on computed fields;
    ``sort="score"`` orders by lead score, highest first.
    """

    q: str = ""
    country: str = "all"
    candidate: bool = False
    category: CategoryTag | None = None
    france_only: bool = False
    sort: Literal["name", "score"] = "name"
    page: int = Field(default=1, ge=1)
    take: int = Field(default=1000, ge=1)


class ExhibitorFacets(BaseModel):
    by_country: list[FacetCount] = Field(default_factory=list)
    by_category: list[FacetCount] = Field(default_factory=list)


class ExhibitorPage(BaseModel):
    """One page of classified exhibitors plus facet counts."""

    total: int
    items: list[ClassifiedExhibitor] = Field(default_factory=list)
    facets: ExhibitorFacets = Field(default_factory=ExhibitorFacets)


class ExhibitorStats(BaseModel):
    total: int
    by_country: list[FacetCount] = Field(default_factory=list)
    by_category: list[FacetCount] = Field(default_factory=list)
