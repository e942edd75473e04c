"""PostgreSQL admin-user repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from nrfdesk.admin_users.models import AdminUser
from nrfdesk.admin_users.store import normalize_email
from nrfdesk.auth.errors import AdminUserError
from nrfdesk.auth.models import Credential
from nrfdesk.db.engine import DatabaseManager
from nrfdesk.db.models import AdminUserRow


def _row_id(user_id: str) -> int | None:
    try:
        return int(user_id)
    except (TypeError, ValueError):
        return None


class PostgresAdminUserRepository:
    """Postgres-backed admin-user storage. Also serves as a credential store."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def create(self, email: str, password_hash: str) -> AdminUser:
        email = normalize_email(email)
        async with self._db.session() as db:
            if await self._find(db, email) is not None:
                raise AdminUserError("DUPLICATE_EMAIL")
            row = AdminUserRow(email=email, password_hash=password_hash)
            db.add(row)
            try:
                await db.commit()
            except IntegrityError as exc:
                await db.rollback()
                raise AdminUserError("DUPLICATE_EMAIL") from exc
            return self._row_to_user(row)

    async def get(self, user_id: str) -> AdminUser | None:
        row_id = _row_id(user_id)
        if row_id is None:
            return None
        async with self._db.session() as db:
            row = await db.get(AdminUserRow, row_id)
            return self._row_to_user(row) if row else None

    async def list_users(
        self, search: str = "", offset: int = 0, limit: int = 20
    ) -> tuple[list[AdminUser], int]:
        needle = search.strip().lower()
        stmt = select(AdminUserRow)
        count_stmt = select(func.count()).select_from(AdminUserRow)
        if needle:
            stmt = stmt.where(AdminUserRow.email.contains(needle, autoescape=True))
            count_stmt = count_stmt.where(AdminUserRow.email.contains(needle, autoescape=True))
        stmt = (
            stmt.order_by(AdminUserRow.created_at.desc(), AdminUserRow.id.desc())
            .offset(offset)
            .limit(limit)
        )
        async with self._db.session() as db:
            rows = (await db.execute(stmt)).scalars().all()
            total = (await db.execute(count_stmt)).scalar_one()
        return [self._row_to_user(r) for r in rows], total

    async def update(
        self,
        user_id: str,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> AdminUser | None:
        row_id = _row_id(user_id)
        if row_id is None:
            return None
        async with self._db.session() as db:
            row = await db.get(AdminUserRow, row_id)
            if row is None:
                return None
            if email is not None:
                email = normalize_email(email)
                other = await self._find(db, email)
                if other is not None and other.id != row.id:
                    raise AdminUserError("DUPLICATE_EMAIL")
                row.email = email
            if password_hash is not None:
                row.password_hash = password_hash
            await db.commit()
            return self._row_to_user(row)

    async def delete(self, user_id: str) -> bool:
        row_id = _row_id(user_id)
        if row_id is None:
            return False
        async with self._db.session() as db:
            row = await db.get(AdminUserRow, row_id)
            if row is None:
                return False
            await db.delete(row)
            await db.commit()
            return True

    async def find_by_identifier(self, identifier: str) -> Credential | None:
        async with self._db.session() as db:
            row = await self._find(db, normalize_email(identifier))
            if row is None:
                return None
            return Credential(
                id=str(row.id),
                identifier=row.email,
                secret_hash=row.password_hash,
                last_login=row.last_login,
            )

    async def touch_last_authenticated(self, user_id: str, when: datetime) -> None:
        row_id = _row_id(user_id)
        if row_id is None:
            return
        async with self._db.session() as db:
            row = await db.get(AdminUserRow, row_id)
            if row is not None:
                row.last_login = when
                await db.commit()

    @staticmethod
    async def _find(db, email: str) -> AdminUserRow | None:
        result = await db.execute(select(AdminUserRow).where(AdminUserRow.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    def _row_to_user(row: AdminUserRow) -> AdminUser:
        return AdminUser(
            id=str(row.id),
            email=row.email,
            created_at=row.created_at,
            last_login=row.last_login,
        )
