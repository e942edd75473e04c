"""PostgreSQL exhibitor repository."""

from __future__ import annotations

from sqlalchemy import func, or_, select

from nrfdesk.db.engine import DatabaseManager
from nrfdesk.db.models import ExhibitorRow
from nrfdesk.exhibitors.models import ExhibitorRecord
from nrfdesk.exhibitors.store import SEARCH_FIELDS


class PostgresExhibitorRepository:
    """Postgres-backed exhibitor storage."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def add(self, record: ExhibitorRecord) -> ExhibitorRecord:
        data = record.model_dump(exclude={"id"})
        if data.get("crawled_at") is None:
            data.pop("crawled_at", None)
        async with self._db.session() as db:
            row = ExhibitorRow(**data)
            if record.id is not None:
                row.id = int(record.id)
            db.add(row)
            await db.commit()
            return self._row_to_record(row)

    async def get(self, exhibitor_id: str) -> ExhibitorRecord | None:
        try:
            row_id = int(exhibitor_id)
        except (TypeError, ValueError):
            return None
        async with self._db.session() as db:
            row = await db.get(ExhibitorRow, row_id)
            return self._row_to_record(row) if row else None

    async def search(
        self, query: str = "", country_patterns: list[str] | None = None
    ) -> list[ExhibitorRecord]:
        stmt = select(ExhibitorRow)
        needle = query.strip().lower()
        if needle:
            stmt = stmt.where(
                or_(
                    *(
                        func.lower(getattr(ExhibitorRow, field)).contains(needle, autoescape=True)
                        for field in SEARCH_FIELDS
                    )
                )
            )
        if country_patterns:
            stmt = stmt.where(
                or_(
                    *(
                        func.lower(ExhibitorRow.country).contains(p.lower(), autoescape=True)
                        for p in country_patterns
                    )
                )
            )
        stmt = stmt.order_by(ExhibitorRow.name.asc())
        async with self._db.session() as db:
            rows = (await db.execute(stmt)).scalars().all()
        return [self._row_to_record(r) for r in rows]

    async def list_recent(self, limit: int = 100) -> list[ExhibitorRecord]:
        stmt = select(ExhibitorRow).order_by(ExhibitorRow.crawled_at.desc()).limit(limit)
        async with self._db.session() as db:
            rows = (await db.execute(stmt)).scalars().all()
        return [self._row_to_record(r) for r in rows]

    async def count(self) -> int:
        async with self._db.session() as db:
            result = await db.execute(select(func.count()).select_from(ExhibitorRow))
            return result.scalar_one()

    @staticmethod
    def _row_to_record(row: ExhibitorRow) -> ExhibitorRecord:
        return ExhibitorRecord(
            id=str(row.id),
            name=row.name,
            country=row.country,
            address=row.address,
            phone=row.phone,
            email=row.email,
            website_url=row.website_url,
            linkedin_url=row.linkedin_url,
            booth=row.booth,
            company_info=row.company_info,
            activities=row.activities,
            target_markets=row.target_markets,
            press_release=row.press_release,
            crawled_at=row.crawled_at,
        )
