"""init

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "work_center",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.UniqueConstraint("name", name="uq_work_center_name"),
    )

    op.create_table(
        "branch",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("work_center_id", sa.Integer(), sa.ForeignKey("work_center.id", ondelete="CASCADE"), nullable=False),
        sa.Column("short_name", sa.String(length=128), nullable=False),
        sa.Column("full_name", sa.String(length=256), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_branch_work_center_id", "branch", ["work_center_id"])

    op.create_table(
        "transformer",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("transformer_number", sa.String(length=64), nullable=False),
        sa.Column("gis_details", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_transformer_transformer_number", "transformer", ["transformer_number"], unique=True)

    op.create_table(
        "outage_request",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("outage_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("work_center_id", sa.Integer(), sa.ForeignKey("work_center.id"), nullable=False),
        sa.Column("branch_id", sa.Integer(), sa.ForeignKey("branch.id"), nullable=False),
        sa.Column("transformer_number", sa.String(length=64), nullable=False),
        sa.Column("gis_details", sa.Text(), nullable=False, server_default=""),
        sa.Column("area", sa.Text(), nullable=True),
        sa.Column("created_by_id", sa.Integer(), nullable=False),
        sa.Column("status_request", sa.String(length=32), nullable=False, server_default="PENDING"),
        sa.Column("status_updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status_updated_by_id", sa.Integer(), nullable=True),
        sa.Column("oms_status", sa.String(length=32), nullable=False, server_default="NOT_STARTED"),
        sa.Column("oms_updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("oms_updated_by_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.UniqueConstraint(
            "transformer_number", "outage_date", "start_time", name="uq_outage_request_transformer_slot"
        ),
    )
    op.create_index("ix_outage_request_outage_date", "outage_request", ["outage_date"])
    op.create_index("ix_outage_request_work_center_id", "outage_request", ["work_center_id"])
    op.create_index("ix_outage_request_branch_id", "outage_request", ["branch_id"])
    op.create_index("ix_outage_request_transformer_number", "outage_request", ["transformer_number"])

def downgrade():
    op.drop_table("outage_request")
    op.drop_table("transformer")
    op.drop_index("ix_branch_work_center_id", table_name="branch")
    op.drop_table("branch")
    op.drop_table("work_center")
