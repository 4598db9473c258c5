# roi_api/db/models.py
# -----------------------------------------------------------------------------
# ORM models
# - Calculation: one stored ROI calculation (inputs + computed result)
# -----------------------------------------------------------------------------
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer
from roi_api.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Calculation(Base):
    """
    Immutable once written: rows are created and deleted, never updated.
    """

    __tablename__ = "calculations"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # input
    monthly_invocations = Column(Float, nullable=False)
    average_execution_time = Column(Float, nullable=False)  # ms
    memory_size = Column(Float, nullable=False)  # MB
    traditional_server_cost = Column(Float, nullable=False)  # USD/month

    # result
    serverless_cost = Column(Float, nullable=False)
    traditional_cost = Column(Float, nullable=False)
    savings = Column(Float, nullable=False)
    roi = Column(Float, nullable=False)
    payback_period = Column(Float, nullable=True)  # NULL = never pays back
