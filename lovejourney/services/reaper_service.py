"""
Suppression des love pages expirées (et de leurs photos Cloudinary)
"""

import logging
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from lovejourney.core import database
from lovejourney.core.config import settings
from lovejourney.core.errors import CleanupError
from lovejourney.repositories.page_repository import PageRepository
from lovejourney.services.media_service import get_media_store

logger = logging.getLogger(__name__)

JOB_ID = "reap_expired_pages"


def reap_expired_pages(store, media_store, now: Optional[datetime] = None) -> int:
    """
    Un passage du reaper. Retourne le nombre de pages supprimées.

    Une photo impossible à supprimer n'empêche pas la suppression de la page :
    une page qui survit à son expiration est pire qu'une image orpheline.
    Chaque page est traitée indépendamment ; les échecs sont comptés et
    remontés en CleanupError à la fin du passage.
    """
    if now is None:
        now = datetime.utcnow()

    try:
        expired_pages = store.find_expired(now)
    except Exception as e:
        raise CleanupError(f"Cleanup failed, could not list expired pages: {e}") from e

    if not expired_pages:
        logger.info("No expired pages found")
        return 0

    reaped = 0
    failed = []
    for page in expired_pages:
        slug = page.slug
        for photo in page.photos or []:
            remote_id = photo.get("id")
            if not remote_id:
                continue
            try:
                media_store.delete(remote_id)
            except Exception as e:
                logger.warning(f"Could not delete image {remote_id} of page {slug}: {e}")

        try:
            store.delete(page)
        except Exception as e:
            logger.error(f"Could not delete love page {slug}: {e}")
            failed.append(slug)
            continue
        reaped += 1
        logger.info(f"Deleted love page {slug}")

    if failed:
        raise CleanupError(
            f"Cleanup deleted {reaped} page(s), {len(failed)} failed: {', '.join(failed)}",
            reaped=reaped,
        )

    logger.info(f"Cleanup complete. Deleted {reaped} pages.")
    return reaped


class ExpiryReaper:
    """Job quotidien, démarré/arrêté avec l'application"""

    def __init__(self, session_factory=None, media_store_factory=get_media_store,
                 hour: Optional[int] = None, minute: Optional[int] = None):
        self.session_factory = session_factory
        self.media_store_factory = media_store_factory
        self.hour = settings.REAPER_HOUR if hour is None else hour
        self.minute = settings.REAPER_MINUTE if minute is None else minute
        self.scheduler = None

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running

    def start(self) -> None:
        if self.running:
            return
        self.scheduler = BackgroundScheduler(timezone="UTC")
        self.scheduler.add_job(
            self.run_once,
            CronTrigger(hour=self.hour, minute=self.minute, timezone="UTC"),
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info(f"Expiry reaper scheduled daily at {self.hour:02d}:{self.minute:02d} UTC")

    def stop(self) -> None:
        if self.running:
            self.scheduler.shutdown(wait=False)
        self.scheduler = None

    def run_once(self, now: Optional[datetime] = None) -> int:
        logger.info("Running expired love pages cleanup job...")
        # résolu à l'appel : les tests remplacent database.SessionLocal
        session_factory = self.session_factory or database.SessionLocal
        db = None
        try:
            db = session_factory()
            return reap_expired_pages(PageRepository(db), self.media_store_factory(), now)
        except CleanupError as e:
            logger.exception(f"Cleanup job failed: {e}")
            return e.reaped
        except Exception as e:
            logger.exception(f"Cleanup job failed before start: {e}")
            return 0
        finally:
            if db is not None:
                db.close()
