# tests/conftest.py
import os
import shutil
import tempfile

# Keep the import-time database and data directories out of the working tree
TEST_DATA_DIR = tempfile.mkdtemp(prefix="researchpad-tests-")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("DATA_PATH", TEST_DATA_DIR)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.models import Project, Task, Note, Citation
from app.config import settings
from app.services.storage import project_storage

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

@pytest.fixture
def engine():
    """Fresh in-memory database per test so commits and rollbacks are real"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()

@pytest.fixture
def db_session(engine):
    """Creates a new database session for a test"""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()

@pytest.fixture
def projects_path(tmp_path, monkeypatch):
    """Point project storage at a per-test directory"""
    path = tmp_path / "projects"
    path.mkdir()
    monkeypatch.setattr(settings, "PROJECTS_PATH", path)
    return path

@pytest.fixture
def client(db_session, projects_path):
    """Test client using the test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def sample_project(db_session, projects_path):
    """Create a sample project with its directory tree"""
    directory = project_storage.provision("Test Project")
    project = Project(name="Test Project", directory_path=str(directory))
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project

@pytest.fixture
def sample_dependents(db_session, sample_project):
    """Attach a task, a note and a citation to the sample project"""
    rows = [
        Task(project_id=sample_project.id, title="Read chapter 3"),
        Note(project_id=sample_project.id, title="Chapter 3", content="Key arguments"),
        Citation(project_id=sample_project.id, title="Some Book", source="ISBN 978-0000000000"),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows

@pytest.fixture(scope="session", autouse=True)
def cleanup_test_files():
    """Clean up test files after all tests are done"""
    yield
    shutil.rmtree(TEST_DATA_DIR, ignore_errors=True)
