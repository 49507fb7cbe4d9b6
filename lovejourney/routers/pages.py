from fastapi import APIRouter, Depends

from lovejourney.repositories.page_repository import PageRepository, get_page_repository
from lovejourney.schemas.love_page import LovePageResponse
from lovejourney.services.publish_service import get_page_by_slug

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("/{slug}", response_model=LovePageResponse)
def get_page(slug: str, store: PageRepository = Depends(get_page_repository)):
    # Récup une love page par son slug (page complète, pas de filtrage côté serveur)
    page = get_page_by_slug(store, slug)
    return LovePageResponse.from_page(page)
