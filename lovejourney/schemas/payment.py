from pydantic import Field
from typing import Optional

from lovejourney.schemas.love_page import CamelModel, LovePageContent

# Schemas paiement Razorpay


class CreateOrderRequest(CamelModel):
    amount: Optional[int] = Field(None, description="Montant en plus petite unité (paise)")
    currency: Optional[str] = None


class CreateOrderResponse(CamelModel):
    order_id: str
    amount: int
    currency: str


class VerifyPaymentRequest(CamelModel):
    # tout est optionnel ici : l'absence est rejetée par le service (400)
    order_id: Optional[str] = None
    payment_id: Optional[str] = None
    signature: Optional[str] = None
    content: Optional[LovePageContent] = None


class VerifyPaymentResponse(CamelModel):
    slug: str
