from fastapi import APIRouter, Depends

from lovejourney.repositories.page_repository import PageRepository, get_page_repository
from lovejourney.schemas.payment import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from lovejourney.services.payment_service import RazorpayClient, create_order, get_payment_provider
from lovejourney.services.publish_service import publish_page

router = APIRouter(prefix="/payment", tags=["payment"])


@router.post("/create-order", response_model=CreateOrderResponse)
def create_payment_order(
    order_data: CreateOrderRequest = None,
    provider: RazorpayClient = Depends(get_payment_provider)
):
    """Crée une commande Razorpay (appelée au clic sur "Payer")"""
    amount = order_data.amount if order_data else None
    currency = order_data.currency if order_data else None
    return create_order(provider, amount, currency)


@router.post("/verify", response_model=VerifyPaymentResponse)
def verify_payment(
    payload: VerifyPaymentRequest,
    store: PageRepository = Depends(get_page_repository)
):
    """Vérifie la signature Razorpay puis enregistre la love page.

    Le callback "success" du widget Razorpay ne prouve rien :
    seule la signature vérifiée ici compte.
    """
    slug = publish_page(
        store,
        order_id=payload.order_id,
        payment_id=payload.payment_id,
        signature=payload.signature,
        content=payload.content,
    )
    return {"slug": slug}
