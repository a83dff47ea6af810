import os
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.database import Base, get_db
from marketplace.main import app
from marketplace.models import (
    Host,
    Image,
    PriceMod,
    Program,
    ProgramInstance,
    Property,
    Retreat,
    RetreatInstance,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: the lifespan would create tables on the configured engine
    yield TestClient(app)
    app.dependency_overrides.clear()


class Factory:
    """Inserts marketplace rows with sensible defaults"""

    def __init__(self, db):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def host(self, **kwargs):
        kwargs.setdefault("name", "Sunrise Hosts")
        return self._save(Host(**kwargs))

    def property(self, **kwargs):
        kwargs.setdefault("name", "Mountain Lodge")
        return self._save(Property(**kwargs))

    def retreat(self, property, **kwargs):
        kwargs.setdefault("name", "Yoga Week")
        kwargs.setdefault("status", "published")
        return self._save(Retreat(property_id=property.id, **kwargs))

    def program(self, property, **kwargs):
        kwargs.setdefault("name", "Breathwork Program")
        kwargs.setdefault("status", "published")
        return self._save(Program(property_id=property.id, **kwargs))

    def retreat_instance(self, retreat, **kwargs):
        start = datetime(2026, 11, 1)
        kwargs.setdefault("start_date", start)
        kwargs.setdefault("end_date", start + timedelta(days=7))
        kwargs.setdefault("available_slots", 10)
        return self._save(RetreatInstance(retreat_id=retreat.id, **kwargs))

    def program_instance(self, program, **kwargs):
        start = datetime(2026, 12, 1)
        kwargs.setdefault("start_date", start)
        kwargs.setdefault("end_date", start + timedelta(days=3))
        kwargs.setdefault("available_slots", 10)
        return self._save(ProgramInstance(program_id=program.id, **kwargs))

    def price_mod(self, **kwargs):
        kwargs.setdefault("name", "Nightly rate")
        kwargs.setdefault("type", "BASE_PRICE")
        kwargs.setdefault("value", 100)
        return self._save(PriceMod(**kwargs))

    def image(self, **kwargs):
        kwargs.setdefault("file_path", "images/cover.jpg")
        return self._save(Image(**kwargs))


@pytest.fixture
def factory(db):
    return Factory(db)


@pytest.fixture
def retreat_chain(factory):
    """Property -> retreat -> instance, with one price mod at each level"""
    prop = factory.property(name="Ocean Villa", city="Ubud", country="ID", lat=-8.5, lng=115.26)
    retreat = factory.retreat(prop)
    instance = factory.retreat_instance(retreat)

    factory.price_mod(name="Tourist tax", type="TAX", value=5, property_id=prop.id)
    factory.price_mod(name="Cleaning", type="FEE", value=20, retreat_id=retreat.id)
    factory.price_mod(name="Week rate", type="BASE_PRICE", value=100, retreat_instance_id=instance.id)

    return {"property": prop, "retreat": retreat, "instance": instance}
