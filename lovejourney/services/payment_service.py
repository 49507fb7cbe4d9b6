"""
Service Razorpay - création de commande (HTTP) et vérification de signature
"""

import hashlib
import hmac
import logging
import time
from typing import Optional

import requests

from lovejourney.core.config import settings
from lovejourney.core.errors import ProviderError, ValidationError

logger = logging.getLogger(__name__)

ORDER_NOTES = {"purpose": "Love Journey Page"}


def compute_signature(order_id: str, payment_id: str, secret: str) -> str:
    message = f"{order_id}|{payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def verify_signature(order_id: str, payment_id: str, signature: str, secret: Optional[str] = None) -> bool:
    """
    True ssi signature == HMAC_SHA256(secret, "order_id|payment_id").

    Ne lève jamais : une entrée manquante ou une mauvaise signature donne False.
    """
    if not order_id or not payment_id or not signature:
        return False
    if secret is None:
        secret = settings.RAZORPAY_KEY_SECRET

    expected = compute_signature(order_id, payment_id, secret)
    # comparaison à temps constant sur tout le digest
    return hmac.compare_digest(expected.encode(), signature.encode())


class RazorpayClient:
    def __init__(self, key_id: str, key_secret: str, base_url: str, timeout: int):
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def create_order(self, amount: int, currency: str, receipt: str, notes: Optional[dict] = None) -> dict:
        payload = {
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "payment_capture": 1,
            "notes": notes or {},
        }
        try:
            response = requests.post(
                f"{self.base_url}/orders",
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Razorpay order error: {e}")
            raise ProviderError() from e


def get_payment_provider() -> RazorpayClient:
    return RazorpayClient(
        key_id=settings.RAZORPAY_KEY_ID,
        key_secret=settings.RAZORPAY_KEY_SECRET,
        base_url=settings.RAZORPAY_API_URL,
        timeout=settings.RAZORPAY_TIMEOUT,
    )


def create_order(provider, amount: Optional[int] = None, currency: Optional[str] = None) -> dict:
    if amount is None:
        amount = settings.PAGE_PRICE
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError("Valid amount is required")
    currency = (currency or settings.CURRENCY).upper()

    order = provider.create_order(
        amount=amount,
        currency=currency,
        receipt=f"receipt_{int(time.time() * 1000)}",
        notes=ORDER_NOTES,
    )
    if not order.get("id"):
        logger.error(f"Razorpay order without id: {order}")
        raise ProviderError()

    logger.info(f"Order {order['id']} created ({order.get('amount', amount)} {currency})")
    return {
        "orderId": order["id"],
        "amount": order.get("amount", amount),
        "currency": order.get("currency", currency),
    }
