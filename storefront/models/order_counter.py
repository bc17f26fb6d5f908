from sqlalchemy import Column, Integer

from ..db.base import Base


class OrderCounter(Base):
    """Single-row table holding the completed-order count."""
    __tablename__ = "order_counters"

    id = Column(Integer, primary_key=True)
    value = Column(Integer, nullable=False, default=0)
