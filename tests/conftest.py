"""
Pytest fixtures for the Workout Builder tests.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Configure environment before importing app
import os
os.environ["INTERNAL_API_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("REDIS_URL", "redis://localhost:6390/0")

from app.main import app
from app.core.config import settings
from app.core.database import Base, get_db
from app.models.workout import Exercise
from app.services.catalog import load_catalog


INTERNAL_HEADERS = {"X-Internal-Secret": "test-secret"}


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session):
    """Test client sending the internal secret, backed by the test database."""
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app, headers=INTERNAL_HEADERS)
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    return {"X-User-Id": "user-1"}


@pytest.fixture
def other_user_headers():
    return {"X-User-Id": "user-2"}


@pytest.fixture
def catalog():
    """The bundled exercise library."""
    return load_catalog(settings.CATALOG_PATH)


@pytest.fixture
def make_exercise():
    """Factory for small hand-built catalogs."""
    def _make(
        id,
        muscles=("Chest",),
        type="weights",
        equipment=(),
        rep="8-12",
        name=None,
    ):
        return Exercise(
            id=id,
            name=name or id.replace("-", " ").title(),
            muscles=list(muscles),
            equipment=list(equipment),
            type=type,
            defaultRepRange=rep,
            youtubeUrl=f"https://example.com/{id}",
        )
    return _make


@pytest.fixture
def sample_workout_request():
    """Sample workout generation request."""
    return {
        "selectedMuscles": ["Chest", "Back"],
        "equipment": ["Bodyweight"],
        "intensity": "moderate",
        "cardioWeightSplit": 30,
        "durationMinutes": 30,
        "workoutStyle": "traditional",
        "stretchingMinutes": 5,
        "stretchingOnly": False
    }


@pytest.fixture
def sample_plan(client, sample_workout_request):
    """A generated plan as JSON."""
    response = client.post("/generate-workout", json=sample_workout_request)
    assert response.status_code == 200
    return response.json()["plan"]
