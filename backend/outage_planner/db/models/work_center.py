from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from outage_planner.db.base import Base
from outage_planner.db.models._mixins import TimestampMixin

class WorkCenter(Base, TimestampMixin):
    __tablename__ = "work_center"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(256), unique=True)

    branches = relationship("Branch", back_populates="work_center", order_by="Branch.id")

class Branch(Base, TimestampMixin):
    __tablename__ = "branch"

    id: Mapped[int] = mapped_column(primary_key=True)
    work_center_id: Mapped[int] = mapped_column(ForeignKey("work_center.id", ondelete="CASCADE"), index=True)
    short_name: Mapped[str] = mapped_column(String(128))
    full_name: Mapped[str | None] = mapped_column(String(256), nullable=True)

    work_center = relationship("WorkCenter", back_populates="branches")
