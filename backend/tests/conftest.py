import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from idlogic.models import Base, IdLogic, ResetType


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_logic(db):
    def _make(slug="employee", format="{PREFIX}-{YYYY}-{MM}-{#####}", **kwargs):
        kwargs.setdefault("reset_type", ResetType.NONE)
        logic = IdLogic(slug=slug, format=format, **kwargs)
        db.add(logic)
        db.commit()
        db.refresh(logic)
        return logic

    return _make


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from idlogic.api.deps import get_db
    from idlogic.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
