# dealflow/models.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class LeadScoreRecord(Base):
    """
    Audit trail of predictive lead scores handed back to wholesalers.
    Written after scoring; the scoring engine never reads it.
    """

    __tablename__ = "lead_scores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    lead_id: Mapped[str | None] = mapped_column(String(120), nullable=True, index=True)
    wholesaler_id: Mapped[str] = mapped_column(String(120), index=True)

    score: Mapped[int] = mapped_column(Integer)
    probability: Mapped[int] = mapped_column(Integer)
    recommendation: Mapped[str] = mapped_column(String(80))

    # {"price_point": 90.0, ...}
    factors_json: Mapped[str] = mapped_column(Text, default="{}")

    # the property payload as scored
    input_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    price: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
