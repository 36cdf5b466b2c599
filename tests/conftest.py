"""Shared test fixtures for pytest"""
import pytest
from fastapi import Request, HTTPException
from httpx import AsyncClient, ASGITransport

from dependencies import get_current_user
from main import app, init_services
from models.user import User
from services.engagement import EngagementService
from services.memory import InMemoryDB
from services.posts import PostStore


@pytest.fixture
def db():
    """In-memory storage seeded with a few user profiles"""
    database = InMemoryDB()
    database.add_user("alice", {"username": "Alice", "profileIcon": "https://img.test/alice.png"})
    database.add_user("bob", {"username": "Bob", "profileIcon": "https://img.test/bob.png"})
    database.add_user("carol", {"username": "Carol"})
    return database


@pytest.fixture
def store(db):
    return PostStore(db)


@pytest.fixture
def engagement(store):
    return EngagementService(store)


@pytest.fixture
async def client(db):
    """HTTP client for API testing; the bearer token is taken as the user id"""

    async def override_get_current_user(request: Request) -> User:
        authorization = request.headers.get("Authorization", "")
        if not authorization.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Invalid authorization header")
        return User(user_id=authorization.split("Bearer ")[1])

    init_services(app, db)
    app.dependency_overrides[get_current_user] = override_get_current_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def auth(user_id: str) -> dict:
    return {"Authorization": f"Bearer {user_id}"}
