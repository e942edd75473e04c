"""Initial schema: admin users and exhibitors.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # -- Admin users --
    op.create_table(
        "admin_users",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
    )

    # -- Exhibitors --
    op.create_table(
        "exhibitors_prw_2025",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("country", sa.Text, nullable=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("phone", sa.Text, nullable=True),
        sa.Column("email", sa.Text, nullable=True),
        sa.Column("website_url", sa.Text, nullable=True),
        sa.Column("linkedin_url", sa.Text, nullable=True),
        sa.Column("booth", sa.Text, nullable=True),
        sa.Column("company_info", sa.Text, nullable=True),
        sa.Column("activities", sa.Text, nullable=True),
        sa.Column("target_markets", sa.Text, nullable=True),
        sa.Column("press_release", sa.Text, nullable=True),
        sa.Column("crawled_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_exhibitors_prw_2025_name", "exhibitors_prw_2025", ["name"])
    op.create_index(
        "ix_exhibitors_prw_2025_crawled_at", "exhibitors_prw_2025", ["crawled_at"]
    )


def downgrade() -> None:
    op.drop_table("exhibitors_prw_2025")
    op.drop_table("admin_users")
