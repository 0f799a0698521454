"""Initial database schema.

Revision ID: 001
Revises:
Create Date: 2025-07-02

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the policy and policy_term tables."""
    # Create policy table
    op.create_table(
        "policy",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("policy_number", sa.String(32), nullable=False),
        sa.Column("insured_name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_policy")),
        sa.UniqueConstraint("policy_number", name=op.f("uq_policy_policy_number")),
    )

    # Create policy_term table
    op.create_table(
        "policy_term",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("policy_id", sa.Uuid(), nullable=False),
        sa.Column("term_number", sa.Integer(), nullable=False),
        sa.Column("state", sa.String(16), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("effective_from_date", sa.Date(), nullable=False),
        sa.Column("effective_to_date", sa.Date(), nullable=False),
        sa.Column("balance_due", sa.Numeric(12, 2), nullable=False),
        sa.Column("next_due_date", sa.Date(), nullable=True),
        sa.Column("last_payment_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_policy_term")),
        sa.ForeignKeyConstraint(
            ["policy_id"],
            ["policy.id"],
            name=op.f("fk_policy_term_policy_id_policy"),
        ),
        sa.UniqueConstraint(
            "policy_id",
            "term_number",
            name=op.f("uq_policy_term_policy_id_term_number"),
        ),
        sa.CheckConstraint(
            "term_number > 0", name=op.f("ck_policy_term_term_number_positive")
        ),
        sa.CheckConstraint(
            "effective_from_date < effective_to_date",
            name=op.f("ck_policy_term_effective_window"),
        ),
        sa.CheckConstraint(
            "balance_due >= 0", name=op.f("ck_policy_term_balance_due_non_negative")
        ),
    )

    # Search and join indexes
    op.create_index(
        op.f("ix_policy_term_policy_id"), "policy_term", ["policy_id"], unique=False
    )
    op.create_index(
        op.f("ix_policy_term_effective_to_date"),
        "policy_term",
        ["effective_to_date"],
        unique=False,
    )
    op.create_index(
        op.f("ix_policy_term_state"), "policy_term", ["state"], unique=False
    )
    op.create_index(
        op.f("ix_policy_term_status"), "policy_term", ["status"], unique=False
    )


def downgrade() -> None:
    """Drop the policy and policy_term tables."""
    op.drop_index(op.f("ix_policy_term_status"), table_name="policy_term")
    op.drop_index(op.f("ix_policy_term_state"), table_name="policy_term")
    op.drop_index(op.f("ix_policy_term_effective_to_date"), table_name="policy_term")
    op.drop_index(op.f("ix_policy_term_policy_id"), table_name="policy_term")
    op.drop_table("policy_term")
    op.drop_table("policy")
