"""LovePage model"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON
from datetime import datetime
from lovejourney.core.database import Base


class LovePage(Base):
    __tablename__ = "love_pages"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(16), unique=True, nullable=False, index=True)  # lien partageable

    # Paiement
    is_paid = Column(Boolean, default=False, nullable=False)
    razorpay_order_id = Column(String, nullable=True)
    razorpay_payment_id = Column(String, nullable=True)

    # Identité
    your_name = Column(String, nullable=False)
    your_gender = Column(String, nullable=False)
    partner_name = Column(String, nullable=False)
    partner_gender = Column(String, nullable=False)

    # Souvenirs
    first_meeting = Column(Text, nullable=False)
    favorite_memory = Column(Text, nullable=False)
    message = Column(Text, nullable=False)

    photos = Column(JSON, default=list)  # [{"url": ..., "id": ...}] dans l'ordre
    music = Column(String, nullable=True)
    theme = Column(String, default="romantic", nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
