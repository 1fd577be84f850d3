"""
Test configuration and fixtures for the QR link service.
This centralizes all test setup, making individual tests clean.
"""

import os
import tempfile

# Point the app at throwaway locations before anything reads settings
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="qrlink-test-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from main import app
from qrlink_app.database.connection import Base, get_db
from qrlink_app.dependencies import get_image_store
from qrlink_app.storage.images import ImageStore

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def image_store(tmp_path):
    """Image store writing into a per-test content directory"""
    return ImageStore(tmp_path / "qrcodes", image_size=256)


@pytest.fixture(scope="function")
def client(db_session, image_store):
    """
    Create a test client with database and image store overridden.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_store] = lambda: image_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
