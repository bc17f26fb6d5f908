from sqlalchemy import Column, Integer, String, Float, Boolean

from ..db.base import Base
from ..models.base import TimeStampMixin


class DiscountCode(Base, TimeStampMixin):
    __tablename__ = "discount_codes"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, nullable=False, unique=True, index=True)
    discount_percent = Column(Float, nullable=False)
    is_used = Column(Boolean, nullable=False, default=False)
