"""initial schema

Revision ID: 5b1c0e2a9f41
Revises:
Create Date: 2025-11-01 18:42:45.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1c0e2a9f41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), server_default="0", nullable=False),
    ]


def _index(table: str, *columns: str, unique: bool = False) -> None:
    for col in columns:
        op.create_index(op.f(f"ix_{table}_{col}"), table, [col], unique=unique)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
    )
    _index("users", "email", unique=True)
    _index("users", "is_deleted")

    op.create_table(
        "establishments",
        *_base_columns(),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("card_invoice_name", sa.String(200), nullable=True),
    )
    _index("establishments", "name", "type", "card_invoice_name", "is_deleted")

    op.create_table(
        "cards",
        *_base_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("brand", sa.Integer(), nullable=False),
        sa.Column("last_four_digits", sa.String(4), nullable=False),
        sa.Column("closing_day", sa.Integer(), nullable=True),
    )
    _index("cards", "name", "type", "brand", "is_deleted")

    op.create_table(
        "expenses",
        *_base_columns(),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column(
            "establishment_id", sa.Integer(),
            sa.ForeignKey("establishments.id", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("payment_type", sa.Integer(), nullable=False),
        sa.Column("card_id", sa.Integer(), sa.ForeignKey("cards.id", ondelete="RESTRICT"), nullable=True),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("installment_count", sa.Integer(), nullable=False),
    )
    _index("expenses", "user_id", "establishment_id", "payment_type", "card_id", "date", "is_deleted")

    op.create_table(
        "credit_card_installments",
        *_base_columns(),
        sa.Column("card_id", sa.Integer(), sa.ForeignKey("cards.id"), nullable=False),
        sa.Column("expense_id", sa.Integer(), sa.ForeignKey("expenses.id"), nullable=False),
        sa.Column("installment_number", sa.Integer(), nullable=False),
        sa.Column("total_installments", sa.Integer(), nullable=False),
        sa.Column("due_date", sa.DateTime(), nullable=False),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False),
        sa.Column("paid_date", sa.DateTime(), nullable=True),
    )
    _index("credit_card_installments", "card_id", "expense_id", "due_date", "is_deleted")

    op.create_table(
        "monthly_entries",
        *_base_columns(),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(200), nullable=False),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("operation", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
    )
    _index("monthly_entries", "month", "year", "is_deleted")

    op.create_table(
        "monthly_spending_limits",
        *_base_columns(),
        sa.Column("establishment_type", sa.Integer(), nullable=False),
        sa.Column("limit_amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
    )
    _index("monthly_spending_limits", "establishment_type", "month", "year", "is_deleted")


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "monthly_spending_limits",
        "monthly_entries",
        "credit_card_installments",
        "expenses",
        "cards",
        "establishments",
        "users",
    ):
        op.drop_table(table)
