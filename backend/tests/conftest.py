import os

# must be set before brewhouse.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ALARM_MONITOR_ENABLED", "false")
os.environ.setdefault("MQTT_ENABLED", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from brewhouse.db import models  # noqa: E402,F401
from brewhouse.db.models import BrewStyle, Tank  # noqa: E402
from brewhouse.db.session import Base  # noqa: E402
from brewhouse.events.bus import EventBus  # noqa: E402
from brewhouse.main import create_app  # noqa: E402


# ═══════════════════════════════════════════════════════════════════
# Database
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
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


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# ═══════════════════════════════════════════════════════════════════
# App
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def app(session_factory):
    return create_app(session_factory=session_factory, start_background=False)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def bus():
    return EventBus()


# ═══════════════════════════════════════════════════════════════════
# Data
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def tank(db):
    t = Tank(name="FV-01", temperature=68.0, status="Active", mode="Idle", valve_status="Closed")
    db.add(t)
    db.commit()
    db.refresh(t)
    return t


@pytest.fixture
def other_tank(db):
    t = Tank(name="FV-02", temperature=68.0, status="Active", mode="Idle", valve_status="Closed")
    db.add(t)
    db.commit()
    db.refresh(t)
    return t


@pytest.fixture
def mead(db):
    """Mead recipe lasting 18 days (10 + 5 + 3), 500 of water."""
    style = BrewStyle(
        name="Wildflower",
        beverage_type="mead",
        primary_fermentation_days=10,
        secondary_fermentation_days=None,
        clarification_days=5,
        conditioning_days=3,
        target_water_volume=500.0,
    )
    db.add(style)
    db.commit()
    db.refresh(style)
    return style


@pytest.fixture
def short_cider(db):
    """Cider recipe lasting 9 days (5 + 2 + 2)."""
    style = BrewStyle(
        name="Dry Cider",
        beverage_type="cider",
        primary_fermentation_days=5,
        clarification_days=2,
        conditioning_days=2,
        juice_total_volume=300.0,
    )
    db.add(style)
    db.commit()
    db.refresh(style)
    return style
