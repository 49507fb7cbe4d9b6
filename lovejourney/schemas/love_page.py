from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
from enum import Enum
from typing import Optional, List

# Schemas pour les love pages (JSON en camelCase côté client)


class Theme(str, Enum):
    romantic = "romantic"
    playful = "playful"
    elegant = "elegant"
    vintage = "vintage"
    modern = "modern"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Photo(CamelModel):
    url: str
    id: Optional[str] = None  # public_id Cloudinary, nécessaire pour supprimer l'image


class LovePageContent(CamelModel):
    your_name: str
    your_gender: str
    partner_name: str
    partner_gender: str
    first_meeting: str
    favorite_memory: str
    message: str
    photos: List[Photo] = []
    music: Optional[str] = None
    theme: Theme = Theme.romantic


class PaymentReference(CamelModel):
    order_id: Optional[str]
    payment_id: Optional[str]


class LovePageResponse(CamelModel):
    slug: str
    is_paid: bool
    payment_reference: Optional[PaymentReference] = None
    your_name: str
    your_gender: str
    partner_name: str
    partner_gender: str
    first_meeting: str
    favorite_memory: str
    message: str
    photos: List[Photo] = []
    music: Optional[str] = None
    theme: str
    created_at: datetime
    expires_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_page(cls, page) -> "LovePageResponse":
        response = cls.model_validate(page)
        if page.is_paid:
            response.payment_reference = PaymentReference(
                order_id=page.razorpay_order_id,
                payment_id=page.razorpay_payment_id,
            )
        return response
