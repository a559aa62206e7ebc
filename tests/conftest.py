import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker


# Ensure `import backend.quickgig...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Test modules import the package at collection time, before any fixture runs, so
# keep backend/.env and a developer's frontend build out of the picture up front.
os.environ["DISABLE_DOTENV"] = "1"
os.environ["FRONTEND_DIST_DIR"] = ""


@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("db") / "test.sqlite3"


@pytest.fixture()
def app(test_db_path: Path):
    """
    Create a FastAPI app wired to a temporary SQLite DB.

    The routers are mounted on a fresh app rather than importing `main.app`, so the
    lifespan (schema creation + admin seed) only runs in tests that ask for it.
    """
    os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{test_db_path}"

    from backend.quickgig import database as db

    engine = db.make_engine(os.environ["DATABASE_URL"])
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    # Patch the shared database module so router dependencies use the test DB.
    db.engine = engine
    db.SessionLocal = TestingSessionLocal

    # Import models so Base metadata is populated, then create tables.
    from backend.quickgig import models  # noqa: F401

    db.Base.metadata.drop_all(bind=engine)
    db.Base.metadata.create_all(bind=engine)

    from backend.quickgig.api import admin as admin_api
    from backend.quickgig.api import application as application_api
    from backend.quickgig.api import auth as auth_api
    from backend.quickgig.api import job as job_api
    from backend.quickgig.utils.error_handlers import register_exception_handlers

    fastapi_app = FastAPI()
    register_exception_handlers(fastapi_app)
    fastapi_app.include_router(auth_api.router)
    fastapi_app.include_router(job_api.router)
    fastapi_app.include_router(application_api.router)
    fastapi_app.include_router(admin_api.router)

    yield fastapi_app

    engine.dispose()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(app: FastAPI):
    """
    Direct SQLAlchemy session bound to the same temporary SQLite DB used by the test app.
    """
    from backend.quickgig.database import SessionLocal

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def signup(client, *, email: str, role: str, password: str = "pw123", name: str = "Test User"):
    return client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "name": name, "role": role},
    )


def create_job(client, *, employer_id: int, title: str = "Dog walking", **overrides):
    body = {
        "employer_id": employer_id,
        "title": title,
        "description": "Walk two friendly dogs around the park",
        "location": "Berlin Mitte",
        "date": "2024-06-01",
        "duration": "2 hours",
        "payment": 50,
    }
    body.update(overrides)
    return client.post("/api/jobs", json=body)


@pytest.fixture()
def employer(client) -> dict:
    r = signup(client, email="boss@example.com", role="employer", name="Erin Employer")
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture()
def worker(client) -> dict:
    r = signup(client, email="worker@example.com", role="worker", name="Will Worker")
    assert r.status_code == 200, r.text
    return r.json()
