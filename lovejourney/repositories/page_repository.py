"""Accès aux love pages en base"""

from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from lovejourney.core.database import get_db
from lovejourney.models.love_page import LovePage


class PageRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, page: LovePage) -> LovePage:
        # un seul INSERT : la page existe entièrement ou pas du tout
        try:
            self.db.add(page)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        # pas de refresh : les colonnes se rechargent à la lecture (expire_on_commit)
        return page

    def get_by_slug(self, slug: str) -> Optional[LovePage]:
        return self.db.query(LovePage).filter(LovePage.slug == slug).first()

    def exists_by_slug(self, slug: str) -> bool:
        return self.db.query(LovePage.id).filter(LovePage.slug == slug).first() is not None

    def find_expired(self, now: datetime) -> List[LovePage]:
        return self.db.query(LovePage).filter(LovePage.expires_at < now).all()

    def delete(self, page: LovePage) -> None:
        try:
            self.db.delete(page)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


def get_page_repository(db: Session = Depends(get_db)) -> PageRepository:
    return PageRepository(db)
