"""In-memory exhibitor store."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone

from nrfdesk.exhibitors.models import ExhibitorRecord

SEARCH_FIELDS = ("name", "company_info", "activities", "target_markets")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _crawl_key(record: ExhibitorRecord) -> datetime:
    crawled = record.crawled_at
    if crawled is None:
        return _EPOCH
    if crawled.tzinfo is None:
        return crawled.replace(tzinfo=timezone.utc)
    return crawled


def matches_query(record: ExhibitorRecord, query: str) -> bool:
    """Case-insensitive substring match over the searchable text fields."""
    needle = query.strip().casefold()
    if not needle:
        return True
    return any(
        needle in (getattr(record, field) or "").casefold() for field in SEARCH_FIELDS
    )


def matches_country(record: ExhibitorRecord, patterns: list[str] | None) -> bool:
    if not patterns:
        return True
    country = (record.country or "").casefold()
    return any(p.casefold() in country for p in patterns)


class InMemoryExhibitorStore:
    """In-memory store for exhibitor records."""

    def __init__(self, records: list[ExhibitorRecord] | None = None) -> None:
        self._records: dict[str, ExhibitorRecord] = {}
        self._ids = itertools.count(1)
        for record in records or []:
            self.add(record)

    def add(self, record: ExhibitorRecord) -> ExhibitorRecord:
        if record.id is None:
            record = record.model_copy(update={"id": self._next_id()})
        self._records[record.id] = record
        return record

    def get(self, exhibitor_id: str) -> ExhibitorRecord | None:
        return self._records.get(exhibitor_id)

    def search(
        self, query: str = "", country_patterns: list[str] | None = None
    ) -> list[ExhibitorRecord]:
        found = [
            r for r in self._records.values()
            if matches_query(r, query) and matches_country(r, country_patterns)
        ]
        return sorted(found, key=lambda r: r.name.casefold())

    def list_recent(self, limit: int = 100) -> list[ExhibitorRecord]:
        ordered = sorted(
            self._records.values(),
            key=_crawl_key,
            reverse=True,
        )
        return ordered[:limit]

    def count(self) -> int:
        return len(self._records)

    def _next_id(self) -> str:
        # Skip ids already taken by records added with an explicit id
        while True:
            candidate = str(next(self._ids))
            if candidate not in self._records:
                return candidate
