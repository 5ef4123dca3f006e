"""initial schema

Revision ID: 3f1a9c2b7d40
Revises:
Create Date: 2025-12-08
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "3f1a9c2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "partners",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "resources",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("partner_id", sa.Integer, sa.ForeignKey("partners.id"), nullable=True),
        sa.Column("day_rate", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "timesheets",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("resource_id", sa.Integer, sa.ForeignKey("resources.id"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("hours", sa.Numeric(6, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Draft"),
    )
    op.create_index("ix_timesheets_resource_date", "timesheets", ["resource_id", "date"])

    op.create_table(
        "expenses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("resource_id", sa.Integer, sa.ForeignKey("resources.id"), nullable=False),
        sa.Column("expense_date", sa.Date, nullable=False),
        sa.Column("amount", sa.Integer, nullable=False),
        sa.Column("category", sa.Text, nullable=False),
        sa.Column("reason", sa.Text, nullable=False, server_default=""),
        sa.Column("procurement_method", sa.String(20), nullable=True),
        sa.Column("chargeable_to_customer", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("status", sa.String(20), nullable=False, server_default=""),
    )
    op.create_index("ix_expenses_resource_date", "expenses", ["resource_id", "expense_date"])


def downgrade() -> None:
    op.drop_index("ix_expenses_resource_date", table_name="expenses")
    op.drop_table("expenses")
    op.drop_index("ix_timesheets_resource_date", table_name="timesheets")
    op.drop_table("timesheets")
    op.drop_table("resources")
    op.drop_table("partners")
