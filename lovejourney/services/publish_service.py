"""
Publication d'une love page après paiement vérifié
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from lovejourney.core.config import settings
from lovejourney.core.errors import AuthenticationError, NotFoundError, PersistenceError, ValidationError
from lovejourney.models.love_page import LovePage
from lovejourney.schemas.love_page import LovePageContent
from lovejourney.services.payment_service import verify_signature
from lovejourney.services.slug_service import allocate_slug, generate_slug, is_valid_slug

logger = logging.getLogger(__name__)

MAX_INSERT_ATTEMPTS = 5


def compute_expiry(created_at: datetime) -> datetime:
    return created_at + timedelta(days=settings.RETENTION_DAYS)


def build_page(slug: str, order_id: str, payment_id: str, content: LovePageContent, now: datetime) -> LovePage:
    # mapping explicite champ par champ : le client ne peut pas forcer is_paid / expires_at
    return LovePage(
        slug=slug,
        is_paid=True,
        razorpay_order_id=order_id,
        razorpay_payment_id=payment_id,
        your_name=content.your_name,
        your_gender=content.your_gender,
        partner_name=content.partner_name,
        partner_gender=content.partner_gender,
        first_meeting=content.first_meeting,
        favorite_memory=content.favorite_memory,
        message=content.message,
        photos=[{"url": photo.url, "id": photo.id} for photo in content.photos],
        music=content.music,
        theme=content.theme.value,
        created_at=now,
        expires_at=compute_expiry(now),
    )


def publish_page(
    store,
    order_id: Optional[str],
    payment_id: Optional[str],
    signature: Optional[str],
    content: Optional[LovePageContent],
    now: Optional[datetime] = None,
    generate=generate_slug,
) -> str:
    """
    Vérifie le paiement puis crée la page. Retourne le slug.

    Étapes (chacune bloquante) :
    1. payload complet sinon ValidationError
    2. signature Razorpay valide sinon AuthenticationError
    3. slug unique
    4. expires_at = now + RETENTION_DAYS
    5. un seul INSERT
    """
    if not payment_id or not order_id or not signature or content is None:
        raise ValidationError("Invalid payload")

    if not verify_signature(order_id, payment_id, signature):
        logger.warning(f"Signature mismatch for order={order_id} payment={payment_id}")
        raise AuthenticationError()

    if now is None:
        now = datetime.utcnow()

    for attempt in range(1, MAX_INSERT_ATTEMPTS + 1):
        try:
            slug = allocate_slug(store, generate)
            store.create(build_page(slug, order_id, payment_id, content, now))
        except IntegrityError as e:
            # un autre insert a pris le slug entre le check et l'insert -> on réalloue
            if _slug_taken(store, slug):
                logger.info(f"Slug {slug} taken concurrently, retrying ({attempt}/{MAX_INSERT_ATTEMPTS})")
                continue
            logger.error(f"Save failed after payment verified: order={order_id} payment={payment_id}: {e}")
            raise PersistenceError() from e
        except SQLAlchemyError as e:
            logger.error(f"Save failed after payment verified: order={order_id} payment={payment_id}: {e}")
            raise PersistenceError() from e

        logger.info(f"Love page {slug} published for order={order_id}")
        return slug

    logger.error(
        f"Save failed after payment verified: order={order_id} payment={payment_id}: "
        f"no free slug after {MAX_INSERT_ATTEMPTS} attempts"
    )
    raise PersistenceError()


def _slug_taken(store, slug: str) -> bool:
    try:
        return store.exists_by_slug(slug)
    except SQLAlchemyError:
        return False


def get_page_by_slug(store, slug: str) -> LovePage:
    # slug mal formé : inutile d'interroger la base
    if not is_valid_slug(slug):
        raise NotFoundError()

    page = store.get_by_slug(slug)
    if page is None:
        raise NotFoundError()
    return page
