"""Create shipments table with unique job index.

Revision ID: 001_create_shipments
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_create_shipments"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "shipments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("job_id", sa.String(9), nullable=False),
        sa.Column("shipment_id", sa.String(12), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("latitude", sa.String(32), nullable=True),
        sa.Column("longitude", sa.String(32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_shipments_job_id", "shipments", ["job_id"], unique=True)
    op.create_index("ix_shipments_shipment_id", "shipments", ["shipment_id"])


def downgrade() -> None:
    op.drop_index("ix_shipments_shipment_id", table_name="shipments")
    op.drop_index("ix_shipments_job_id", table_name="shipments")
    op.drop_table("shipments")
