"""Create movements table

Revision ID: 20261017_create_movements
Revises: 
Create Date: 2026-10-17 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261017_create_movements"
down_revision = None
branch_labels = None
depends_on = None

TEXT_COLUMNS = [
    "month",
    "invoice_number",
    "access_key",
    "description",
    "supplier",
    "invoice_date",
    "unloading_date",
    "plate",
    "container",
    "destination",
    "exit_billing_date",
    "exit_cte",
    "arrival_time",
    "entry_time",
    "exit_time",
    "billing_issue_date",
    "billing_cte",
    "billing_cte_issue_date",
    "carrier_cte",
]


def upgrade():
    op.create_table(
        "movements",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=8), nullable=False, server_default="in_stock"),
        sa.Column("weight", sa.Numeric(12, 3), nullable=False, server_default="0"),
        sa.Column("value", sa.Numeric(14, 2), nullable=False, server_default="0"),
        *[sa.Column(name, sa.String(), nullable=False, server_default="") for name in TEXT_COLUMNS],
    )
    op.create_index("ix_movements_position", "movements", ["position"])


def downgrade():
    op.drop_index("ix_movements_position", table_name="movements")
    op.drop_table("movements")
