"""
Jodi - Test Configuration and Fixtures
"""
import os
import tempfile
from datetime import datetime, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

# Set testing environment before the app reads its configuration
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["ADMIN_EMAILS"] = "admin@example.com"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="jodi-uploads-")
os.environ["MONGO_URI"] = "mongodb://localhost:27017"

from jodi.main import app
from jodi.db.mongo import get_people_collection, get_users_collection
from jodi.filters.budget import budget_fields
from jodi.routes.auth.routes import hash_password
from jodi.utils.jwt_utils import create_access_token

UPLOAD_DIR = os.environ["UPLOAD_DIR"]


@pytest.fixture
def mongo_db():
    return mongomock.MongoClient()["jodi-test"]


@pytest.fixture
def people_collection(mongo_db):
    return mongo_db["people"]


@pytest.fixture
def users_collection(mongo_db):
    return mongo_db["users"]


@pytest.fixture
def client(people_collection, users_collection):
    """Test client with both collections swapped for in-memory ones"""
    app.dependency_overrides[get_people_collection] = lambda: people_collection
    app.dependency_overrides[get_users_collection] = lambda: users_collection
    yield TestClient(app)
    app.dependency_overrides.clear()


def _auth_headers(users_collection, email: str, is_admin: bool) -> dict:
    result = users_collection.insert_one({
        "name": email.split("@")[0],
        "email": email,
        "password": hash_password("secret123"),
        "isAdmin": is_admin,
    })
    token = create_access_token(str(result.inserted_id), email, name=email.split("@")[0], is_admin=is_admin)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(users_collection):
    return _auth_headers(users_collection, "admin@example.com", is_admin=True)


@pytest.fixture
def user_headers(users_collection):
    return _auth_headers(users_collection, "viewer@example.com", is_admin=False)


def photo(name: str = "photo.jpg", content: bytes = b"\xff\xd8\xff\xe0 not really a jpeg") -> tuple:
    return ("photos", (name, content, "image/jpeg"))


@pytest.fixture
def seed_person(people_collection):
    """Insert a person document directly, deriving budgetNumeric like the API does."""
    def _seed(**fields):
        doc = {
            "name": "Test Person",
            "gender": "Female",
            "maritalStatus": "Never Married",
            "religion": "Hindu",
            "phoneNumber": "9876543210",
            "photos": [],
            "createdAt": datetime.now(timezone.utc),
        }
        doc.update(fields)
        if "budget" in doc:
            numeric, _ = budget_fields(doc["budget"])
            doc.update(numeric)
        doc["_id"] = people_collection.insert_one(doc).inserted_id
        return doc
    return _seed
