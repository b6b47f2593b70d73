"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.courses import DEFAULT_COURSES, CourseCatalog
from database.db import Base
from database.store import SqlDocumentStore
from models.documents import Document  # noqa: F401
from services.student_repository import StudentRepository

TEST_KEY = "grade_system:test"


@pytest.fixture
def catalog():
    return CourseCatalog(DEFAULT_COURSES)


@pytest.fixture
def session_factory():
    """In-memory SQLite shared across threads (TestClient runs sync routes in a threadpool)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return SqlDocumentStore(session_factory)


@pytest.fixture
def repository(store, catalog):
    return StudentRepository(store, catalog, TEST_KEY)


@pytest.fixture
def client(repository):
    """App client with the repository dependency pointed at the in-memory store"""
    from main import app
    from dependencies.repository import get_repository

    app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()
