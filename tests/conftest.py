import os
import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

# Config de test AVANT d'importer l'app (settings lus à l'import)
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["RAZORPAY_KEY_SECRET"] = "test_secret"
os.environ["REAPER_ENABLED"] = "false"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer app
import lovejourney.core.database
lovejourney.core.database.engine = test_engine
lovejourney.core.database.SessionLocal = TestingSessionLocal

from lovejourney.core.database import Base, get_db
from lovejourney.core.errors import MediaStorageError, ProviderError
from lovejourney.main import app
from lovejourney.services.media_service import get_media_store
from lovejourney.services.payment_service import get_payment_provider


class FakeRazorpay:
    """Remplace l'API Razorpay"""

    def __init__(self):
        self.orders = []
        self.fail = False

    def create_order(self, amount, currency, receipt, notes=None):
        if self.fail:
            raise ProviderError()
        order = {
            "id": f"order_TEST{len(self.orders) + 1:04d}",
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "notes": notes,
            "status": "created",
        }
        self.orders.append(order)
        return order


class FakeMediaStore:
    """Remplace Cloudinary"""

    def __init__(self):
        self.uploaded = {}
        self.deleted = []
        self.fail_uploads = set()  # filenames qui échouent
        self.fail_deletes = set()  # ids qui échouent

    def upload(self, data, filename=None):
        if filename in self.fail_uploads:
            raise MediaStorageError("Image upload failed")
        remote_id = f"love-pages/img{len(self.uploaded) + 1}"
        self.uploaded[remote_id] = data
        return {"url": f"https://res.cloudinary.com/demo/image/upload/{remote_id}.jpg", "id": remote_id}

    def delete(self, remote_id):
        if remote_id in self.fail_deletes:
            raise MediaStorageError(f"Could not delete {remote_id}")
        self.deleted.append(remote_id)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

# Override la dépendance
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def provider():
    """Razorpay factice, neuf à chaque test"""
    fake = FakeRazorpay()
    app.dependency_overrides[get_payment_provider] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_payment_provider, None)


@pytest.fixture(autouse=True)
def media_store():
    """Cloudinary factice, neuf à chaque test"""
    fake = FakeMediaStore()
    app.dependency_overrides[get_media_store] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_media_store, None)


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


@pytest.fixture
def content():
    """Contenu d'une love page tel qu'envoyé par le formulaire"""
    return {
        "yourName": "Aarav",
        "yourGender": "male",
        "partnerName": "Meera",
        "partnerGender": "female",
        "firstMeeting": "At the college library, fighting over the last copy of a novel.",
        "favoriteMemory": "Watching the monsoon rain from the rooftop.",
        "message": "Seven years and counting. Happy anniversary!",
        "photos": [
            {"url": "https://res.cloudinary.com/demo/image/upload/love-pages/a.jpg", "id": "love-pages/a"},
            {"url": "https://res.cloudinary.com/demo/image/upload/love-pages/b.jpg", "id": "love-pages/b"},
        ],
        "music": None,
        "theme": "vintage",
    }
