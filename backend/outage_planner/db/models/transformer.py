from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from outage_planner.db.base import Base
from outage_planner.db.models._mixins import TimestampMixin

class Transformer(Base, TimestampMixin):
    __tablename__ = "transformer"

    id: Mapped[int] = mapped_column(primary_key=True)
    transformer_number: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    gis_details: Mapped[str | None] = mapped_column(Text, nullable=True)  # installation location
