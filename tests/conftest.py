"""
Test configuration and fixtures
"""
import os
import tempfile

# Settings are read at import time, so the environment goes first
UPLOAD_ROOT = tempfile.mkdtemp(prefix="thesis-uploads-")
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = UPLOAD_ROOT
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.core import upload_service
from app.db import Base
from app.main import app

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(test_engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session():
    """Fresh schema for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def clean_uploads():
    """Empty the upload directories after each test, keeping the directories"""
    yield
    for directory in (upload_service.thesis_dir(), upload_service.subtask_dir(), upload_service.staging_dir()):
        if directory.exists():
            for path in directory.iterdir():
                path.unlink()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup(client, username, email, password="pw123", role="student"):
    return client.post(
        "/auth/signup",
        json={"username": username, "email": email, "password": password, "role": role},
    )


def login(client, email, password="pw123"):
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def register_and_login(client, username, email, role):
    response = signup(client, username, email, role=role)
    assert response.status_code == 201, response.text
    data = login(client, email)
    return {"id": data["userId"], "username": username, "headers": bearer(data["token"])}


@pytest.fixture
def teacher(client):
    return register_and_login(client, "alice", "alice@x.com", "teacher")


@pytest.fixture
def student(client):
    return register_and_login(client, "bob", "bob@x.com", "student")


@pytest.fixture
def other_student(client):
    return register_and_login(client, "carol", "carol@x.com", "student")


def add_thesis(client, teacher, **overrides):
    body = {
        "title": "T1",
        "requestDueDate": "2025-01-01",
        "thesisDueDate": "2025-06-01",
        "description": "d",
        "subtasks": [],
    }
    body.update(overrides)
    response = client.post("/thesis/add", json=body, headers=teacher["headers"])
    assert response.status_code == 201, response.text
    return response.json()["thesis"]


@pytest.fixture
def approved_thesis(client, teacher, student):
    """A thesis with two subtasks, requested by and approved for ``student``"""
    thesis = add_thesis(
        client,
        teacher,
        subtasks=[
            {"week": 1, "description": "Literature review"},
            {"week": 2, "description": "Outline"},
        ],
    )
    response = client.post("/thesis/request", json={"thesisId": thesis["id"]}, headers=student["headers"])
    assert response.status_code == 200, response.text
    response = client.post(
        "/thesis/approve",
        json={"thesisId": thesis["id"], "studentId": student["id"]},
        headers=teacher["headers"],
    )
    assert response.status_code == 200, response.text
    return response.json()["thesis"] | {"subtasks": thesis["subtasks"]}
