import os

# Keep imports from touching the on-disk database or the network
os.environ.setdefault("COMMAND_CENTER_DB_URL", "sqlite://")
os.environ.setdefault("COMMAND_CENTER_LIVE_REFRESH", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from command_center.database import get_db
from command_center.live.cache import LiveDataCache
from command_center.models import Base
from command_center.service import create_app


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def app(session_factory):
    application = create_app(enable_live_refresh=False, session_factory=session_factory, init_database=False)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def live_cache(app) -> LiveDataCache:
    return app.state.live_cache
