#portal/data/models/cart_slot.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime

from portal.data.database import Base


class CartSlotModel(Base):
    __tablename__ = "cart_slots"

    #klucz slotu, np "<session_id>:cart"
    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
