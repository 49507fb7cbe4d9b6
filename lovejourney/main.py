import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lovejourney.core.config import settings
from lovejourney.core.database import engine, Base
from lovejourney.core.errors import register_error_handlers
from lovejourney.models import love_page  # noqa: F401  (enregistre la table)
from lovejourney.routers import health, payment, pages, media
from lovejourney.services.reaper_service import ExpiryReaper

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

# Init DB
Base.metadata.create_all(bind=engine)

reaper = ExpiryReaper()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Cron de nettoyage des pages expirées, lié à la vie du process
    if settings.REAPER_ENABLED:
        reaper.start()
    try:
        yield
    finally:
        reaper.stop()


app = FastAPI(
    title="Love Journey API",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes
app.include_router(health.router)
app.include_router(payment.router)
app.include_router(pages.router)
app.include_router(media.router)


def run():
    uvicorn.run("lovejourney.main:app", host="0.0.0.0", port=settings.PORT, log_level="info")


if __name__ == "__main__":
    run()
