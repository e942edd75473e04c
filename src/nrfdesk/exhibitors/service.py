"""Exhibitor listing, candidate selection and statistics.

Computed flags are derived on every read through the classification
engine; nothing derived is written back to the store.
"""

from __future__ import annotations

from collections import Counter

from nrfdesk.classification.rules import ClassificationEngine, combine_text, default_engine
from nrfdesk.core.types import FacetCount
from nrfdesk.exhibitors.models import (
    ClassifiedExhibitor,
    ComputedFields,
    ExhibitorFacets,
    ExhibitorPage,
    ExhibitorQuery,
    ExhibitorRecord,
    ExhibitorStats,
)
from nrfdesk.repositories import resolve
from nrfdesk.repositories.protocols import ExhibitorRepository

# Country filter value -> substrings looked for in the country field
COUNTRY_FILTER_PATTERNS: dict[str, list[str]] = {
    "France": ["FRANCE"],
    "Spain": ["SPAIN"],
    "Italy": ["ITALY"],
    "Netherlands": ["NETHERLANDS"],
    "China": ["CHINA"],
    "Taiwan": ["TAIWAN"],
    "United States": ["UNITED STATES", "UNITED"],
    "Romania": ["ROMANIA"],
}

# Last word of a country field -> display name
_COUNTRY_NAMES: dict[str, str] = {
    "FRANCE": "France",
    "SPAIN": "Spain",
    "ITALY": "Italy",
    "NETHERLANDS": "Netherlands",
    "CHINA": "China",
    "TAIWAN": "Taiwan",
    "UNITED": "United States",
    "STATES": "United States",
    "ROMANIA": "Romania",
}

COUNTRY_FACET_LIMIT = 10

# Each keyword found in activities, company_info or target_markets adds
# LEAD_SCORE_KEYWORD_POINTS
LEAD_SCORE_KEYWORDS = ("apparel", "retail", "brand", "fashion", "boutique")
LEAD_SCORE_KEYWORD_POINTS = 3


def country_patterns_for(country: str) -> list[str] | None:
    """Return the substrings to filter on, or None for ``all``."""
    if not country or country == "all":
        return None
    return COUNTRY_FILTER_PATTERNS.get(country, [country.upper()])


def extract_country_name(country: str | None) -> str:
    """Map a free-text country field to a facet label."""
    if not country or not country.strip():
        return "Unknown"
    last = country.strip().split()[-1]
    return _COUNTRY_NAMES.get(last.upper(), last)


def lead_score(record: ExhibitorRecord, computed: ComputedFields) -> int:
    """Rank a classified record for outreach; higher is a better lead."""
    score = 0
    if computed.pants_candidate:
        score += 30
    if computed.is_france:
        score += 20
    if record.booth:
        score += 10
    if record.linkedin_url:
        score += 10
    if record.website_url:
        score += 5
    text = combine_text(record.activities, record.company_info, record.target_markets)
    score += LEAD_SCORE_KEYWORD_POINTS * sum(1 for k in LEAD_SCORE_KEYWORDS if k in text)
    return score


def _facets(counter: Counter[str], limit: int | None = None) -> list[FacetCount]:
    ordered = sorted(counter.items(), key=lambda kv: (-kv[1], kv[0]))
    if limit is not None:
        ordered = ordered[:limit]
    return [FacetCount(value=value, count=count) for value, count in ordered]


class ExhibitorService:
    """Read-side operations over an ``ExhibitorRepository``."""

    def __init__(
        self,
        repository: ExhibitorRepository,
        engine: ClassificationEngine | None = None,
    ) -> None:
        self._repository = repository
        self._engine = engine or default_engine

    @property
    def engine(self) -> ClassificationEngine:
        return self._engine

    def classify_record(self, record: ExhibitorRecord) -> ClassifiedExhibitor:
        computed = self._engine.classify(record)
        return ClassifiedExhibitor.from_record(
            record, computed, lead_score=lead_score(record, computed)
        )

    async def get(self, exhibitor_id: str) -> ClassifiedExhibitor | None:
        record = await resolve(self._repository.get(exhibitor_id))
        return self.classify_record(record) if record else None

    async def list_exhibitors(self, query: ExhibitorQuery | None = None) -> ExhibitorPage:
        """Search, classify, filter and paginate exhibitors.

        Facets cover the whole search result, before the computed-field
        filters (candidate, category, France only).
        """
        query = query or ExhibitorQuery()
        records = await resolve(
            self._repository.search(query.q, country_patterns_for(query.country))
        )
        classified = [self.classify_record(r) for r in records]

        facets = ExhibitorFacets(
            by_country=_facets(
                Counter(extract_country_name(item.country) for item in classified),
                limit=COUNTRY_FACET_LIMIT,
            ),
            by_category=_facets(Counter(item.category_tag.value for item in classified)),
        )

        if query.candidate:
            classified = [item for item in classified if item.pants_candidate]
        if query.category is not None:
            classified = [item for item in classified if item.category_tag == query.category]
        if query.france_only:
            classified = [item for item in classified if item.is_france]
        if query.sort == "score":
            # Stable: equal scores keep name order
            classified.sort(key=lambda item: -item.lead_score)

        start = (query.page - 1) * query.take
        return ExhibitorPage(
            total=len(classified),
            items=classified[start:start + query.take],
            facets=facets,
        )

    async def candidates(self, take: int = 100) -> list[ClassifiedExhibitor]:
        """Lead candidates among the ``take`` most recently crawled records."""
        records = await resolve(self._repository.list_recent(take))
        classified = [self.classify_record(r) for r in records]
        return [item for item in classified if item.pants_candidate]

    async def stats(self) -> ExhibitorStats:
        records = await resolve(self._repository.search())
        by_country = Counter((r.country or "").strip() or "Unknown" for r in records)
        by_category = Counter(self._engine.classify(r).category_tag.value for r in records)
        return ExhibitorStats(
            total=len(records),
            by_country=_facets(by_country, limit=COUNTRY_FACET_LIMIT),
            by_category=_facets(by_category),
        )
