import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from nongkrongr import models  # noqa: F401
from nongkrongr.db.base import Base
from nongkrongr.db.session import get_db
from nongkrongr.main import app
from nongkrongr.schemas.cafe import CafeCreate, Coords
from nongkrongr.schemas.recommendation import AiRecommendationParams
from nongkrongr.schemas.vocabulary import VocabularyCreate
from nongkrongr.models.vocabulary import Amenity, Vibe
from nongkrongr.services import cafes as cafe_service
from nongkrongr.services import vocabulary
from nongkrongr.services.catalog import catalog


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def fresh_catalog():
    catalog.reset()
    yield
    catalog.reset()


@pytest.fixture()
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def seeded(db):
    """Two vibes, two amenities and three approved cafes."""
    for model, item_id, name in (
        (Vibe, "cozy", "Cozy"),
        (Vibe, "aesthetic", "Aesthetic"),
        (Amenity, "wifi", "WiFi"),
        (Amenity, "outlet", "Colokan"),
    ):
        vocabulary.create_item(db, model, VocabularyCreate(id=item_id, name=name))

    cafe_service.create_cafe(
        db,
        CafeCreate(
            id="cafe-kopi",
            name="Kopi Kenangan Senja",
            district="Ilir Barat I",
            opening_hours="08:00 - 22:00",
            price_tier=2,
            coords=Coords(lat=-2.9761, lng=104.7754),
            vibes=["cozy"],
            amenities=["wifi", "outlet"],
        ),
    )
    cafe_service.create_cafe(
        db,
        CafeCreate(
            id="cafe-rooftop",
            name="Rooftop Musi",
            district="Seberang Ulu I",
            opening_hours="16:00 - 02:00",
            price_tier=4,
            coords=Coords(lat=-2.9900, lng=104.7600),
            vibes=["aesthetic"],
            amenities=["wifi"],
        ),
    )
    cafe_service.create_cafe(
        db,
        CafeCreate(
            id="cafe-warung",
            name="Warung Kopi Ampera",
            district="Ilir Barat I",
            opening_hours="24 Jam",
            price_tier=1,
            coords=Coords(lat=-2.9915, lng=104.7637),
        ),
    )
    return db


class FakeLLM:
    """Stands in for the OpenAI-backed service."""

    def __init__(self, params=None, error=None):
        self.params = params or AiRecommendationParams()
        self.error = error
        self.prompts = []

    def extract_recommendation_params(self, prompt, vibes, amenities):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.params


@pytest.fixture()
def fake_llm(monkeypatch):
    def install(params=None, error=None):
        fake = FakeLLM(params, error)
        monkeypatch.setattr("nongkrongr.services.recommendation.llm_service", fake)
        return fake

    return install
