import datetime as dt
from enum import Enum
from sqlalchemy import String, ForeignKey, Date, Time, DateTime, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from outage_planner.db.base import Base
from outage_planner.db.models._mixins import TimestampMixin

class ApprovalStatus(str, Enum):
    pending = "PENDING"
    confirmed = "CONFIRMED"
    cancelled = "CANCELLED"

class OmsStatus(str, Enum):
    not_started = "NOT_STARTED"
    processed = "PROCESSED"
    cancelled = "CANCELLED"

class OutageRequest(Base, TimestampMixin):
    __tablename__ = "outage_request"
    __table_args__ = (
        UniqueConstraint(
            "transformer_number", "outage_date", "start_time", name="uq_outage_request_transformer_slot"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    outage_date: Mapped[dt.date] = mapped_column(Date, index=True)
    start_time: Mapped[dt.time] = mapped_column(Time)
    end_time: Mapped[dt.time] = mapped_column(Time)

    work_center_id: Mapped[int] = mapped_column(ForeignKey("work_center.id"), index=True)
    branch_id: Mapped[int] = mapped_column(ForeignKey("branch.id"), index=True)
    transformer_number: Mapped[str] = mapped_column(String(64), index=True)
    gis_details: Mapped[str] = mapped_column(Text, default="")
    area: Mapped[str | None] = mapped_column(Text, nullable=True)

    # users live in the auth service; keep plain references
    created_by_id: Mapped[int] = mapped_column(Integer)

    status_request: Mapped[str] = mapped_column(String(32), default=ApprovalStatus.pending.value)
    status_updated_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status_updated_by_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    oms_status: Mapped[str] = mapped_column(String(32), default=OmsStatus.not_started.value)
    oms_updated_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    oms_updated_by_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    work_center = relationship("WorkCenter")
    branch = relationship("Branch")
