"""
Shared fixtures: temporary SQLite database (tables recreated per test), TestClient,
users/admins with Bearer headers, and a category + two-question quiz created through the API.
DATABASE_URL is set before quizora is imported so the engine binds to the temp file.
"""
import os
import tempfile
import uuid

_DB_PATH = os.path.join(tempfile.gettempdir(), f"quizora-test-{uuid.uuid4().hex[:8]}.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient

import quizora.models  # noqa: F401,E402
from quizora.database import Base, SessionLocal, engine  # noqa: E402
from quizora.main import app  # noqa: E402
from quizora.models.user import User, ROLE_ADMIN, ROLE_USER  # noqa: E402
from quizora.services.auth import create_access_token, hash_password  # noqa: E402

DEFAULT_PASSWORD = "password123"


def make_user(role: str = ROLE_USER, email: str | None = None, name: str = "Test User") -> User:
    """Insert a user directly; returned instance is detached with columns loaded."""
    db = SessionLocal()
    try:
        user = User(
            name=name,
            email=email or f"user-{uuid.uuid4().hex[:8]}@tests.example.com",
            password_hash=hash_password(DEFAULT_PASSWORD),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    finally:
        db.close()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


def quiz_payload(category_id: str, correct: tuple = (0, 1), passing_score: float = 70, **extra) -> dict:
    payload = {
        "categoryId": category_id,
        "title": "Capitals",
        "description": "World capitals",
        "passingScore": passing_score,
        "totalPoints": 100,
        "timeLimit": 10,
        "questions": [
            {
                "questionText": f"Question {i + 1}?",
                "options": ["first", "second", "third"],
                "correctAnswerIndex": idx,
                "explanation": f"Because option {idx}.",
            }
            for i, idx in enumerate(correct)
        ],
    }
    payload.update(extra)
    return payload


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user():
    return make_user()


@pytest.fixture
def admin():
    return make_user(role=ROLE_ADMIN, name="Admin User")


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def category(client, admin_headers):
    r = client.post("/api/categories", json={"name": "Geography", "description": "Maps"}, headers=admin_headers)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def quiz(client, admin_headers, category):
    """Two questions, correct indices [0, 1], passing score 70."""
    r = client.post("/api/quizzes", json=quiz_payload(category["id"]), headers=admin_headers)
    assert r.status_code == 201, r.text
    return r.json()
