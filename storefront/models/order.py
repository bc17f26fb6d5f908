from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.orm import relationship

from ..db.base import Base
from ..models.base import utcnow


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True)
    sequence = Column(Integer, nullable=False, unique=True)  # position in the order log
    user_id = Column(String, nullable=False, index=True)
    total_amount = Column(Float, nullable=False)
    discount_code = Column(String, nullable=True)
    discount_amount = Column(Float, nullable=False, default=0)
    final_amount = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
        lazy="selectin",
    )
