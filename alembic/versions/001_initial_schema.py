"""Initial schema — timecards.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "timecards",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("employee", sa.Integer, nullable=False),
        sa.Column("opened", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("version", sa.String(20), nullable=False, server_default="timecard-0.1"),
        sa.Column("lines", sa.JSON, nullable=False),
        sa.Column("transitions", sa.JSON, nullable=False),
    )
    op.create_index("ix_timecards_employee", "timecards", ["employee"])


def downgrade() -> None:
    op.drop_index("ix_timecards_employee", table_name="timecards")
    op.drop_table("timecards")
