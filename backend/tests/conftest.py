"""
Point the app at a throwaway SQLite database and local store before any test
module imports it, then build the schema straight from the models.
"""
import os
import tempfile
import uuid

_tmp = tempfile.mkdtemp(prefix="gymapp-tests-")
os.environ["DB_URL"] = f"sqlite:///{os.path.join(_tmp, 'test.db')}"
os.environ["LOCAL_STORE_DIR"] = os.path.join(_tmp, "store")
os.environ.pop("STRIPE_SECRET_KEY", None)
os.environ.pop("ANTHROPIC_API_KEY", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from gymapp.db import Base, SessionLocal, engine  # noqa: E402
from gymapp import models  # noqa: E402,F401
from gymapp.fitness.achievements import DEFAULT_ACHIEVEMENTS  # noqa: E402
from gymapp.repositories.achievement_repo import AchievementRepository  # noqa: E402

Base.metadata.create_all(bind=engine)
with SessionLocal() as _db:
    AchievementRepository(_db).seed(DEFAULT_ACHIEVEMENTS)

PWD = "StrongPassw0rd!"


@pytest.fixture
def client():
    from gymapp.main import app
    return TestClient(app)


@pytest.fixture
def make_user(client):
    """Register + login a fresh user; returns (headers, user_json)."""
    def _make(username="lifter"):
        email = f"{uuid.uuid4().hex[:10]}@ex.com"
        client.post("/auth/register", json={"email": email, "username": username, "password": PWD})
        tok = client.post("/auth/login", json={"email": email, "password": PWD}).json()["access_token"]
        headers = {"Authorization": f"Bearer {tok}"}
        return headers, client.get("/auth/me", headers=headers).json()
    return _make


@pytest.fixture
def auth(make_user):
    headers, _ = make_user()
    return headers


@pytest.fixture
def premium_user(make_user):
    from gymapp.models import SubscriptionStatus
    from gymapp.repositories.user_repo import UserRepository

    headers, me = make_user("premium")
    with SessionLocal() as db:
        repo = UserRepository(db)
        repo.update_subscription(repo.get(me["id"]), subscription_status=SubscriptionStatus.premium)
    return headers, me
