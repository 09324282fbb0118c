import os

# Set testing environment before the application is imported
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from petcare.main import app
from petcare.core.database import get_db, Base, redis_client
import petcare.models  # noqa: F401  registers tables on Base.metadata

# Create test database
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db

@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    redis_client.flushall()
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(test_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def client(test_db):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

def register(client, name, email, role="client", password="secret1", **extra):
    """Register a user and return (user, headers)."""
    payload = {"name": name, "email": email, "password": password, "role": role}
    payload.update(extra)
    response = client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201, response.json()
    data = response.json()["data"]
    client.cookies.clear()
    return data["user"], {"Authorization": f"Bearer {data['token']}"}

@pytest.fixture
def users(client):
    """One account per role plus a second client and a second veterinarian."""
    admin, admin_headers = register(client, "ada admin", "admin@example.com", "admin")
    vet, vet_headers = register(client, "victor vet", "vet@example.com", "veterinarian")
    other_vet, other_vet_headers = register(client, "olga vet", "olga@example.com", "veterinarian")
    alice, alice_headers = register(client, "alice client", "alice@example.com")
    bob, bob_headers = register(client, "bob client", "bob@example.com")
    return {
        "admin": (admin, admin_headers),
        "vet": (vet, vet_headers),
        "other_vet": (other_vet, other_vet_headers),
        "alice": (alice, alice_headers),
        "bob": (bob, bob_headers),
    }

def create_pet(client, headers, **fields):
    payload = {"name": "rex", "species": "dog"}
    payload.update(fields)
    response = client.post("/api/v1/pets", json=payload, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["data"]["pet"]

def book(client, headers, pet_id, vet_id, **fields):
    payload = {
        "pet": pet_id,
        "veterinarian": vet_id,
        "date": "2030-05-01",
        "time": "10:00",
        "reason": "Annual checkup",
    }
    payload.update(fields)
    response = client.post("/api/v1/appointments", json=payload, headers=headers)
    assert response.status_code == 201, response.json()
    return response.json()["data"]["appointment"]
