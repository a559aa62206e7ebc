import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, OperationalError

from backend.quickgig.utils.error_handlers import (
    AppError,
    ConstraintViolationError,
    DuplicateApplicationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    handle_database_error,
    is_duplicate_application,
    is_duplicate_email,
    register_exception_handlers,
)


def _integrity(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


@pytest.mark.parametrize(
    "message",
    [
        "UNIQUE constraint failed: users.email",
        'duplicate key value violates unique constraint "users_email_key"',
    ],
)
def test_duplicate_email_detected(message):
    assert is_duplicate_email(_integrity(message))
    assert not is_duplicate_application(_integrity(message))


@pytest.mark.parametrize(
    "message",
    [
        "UNIQUE constraint failed: applications.job_id, applications.worker_id",
        'duplicate key value violates unique constraint "uq_applications_job_worker"',
    ],
)
def test_duplicate_application_detected(message):
    assert is_duplicate_application(_integrity(message))
    assert not is_duplicate_email(_integrity(message))


def test_other_integrity_failures_are_constraint_violations():
    err = _integrity("NOT NULL constraint failed: users.email")
    assert not is_duplicate_email(err)
    assert isinstance(handle_database_error(err, "test"), ConstraintViolationError)

    fk = _integrity("FOREIGN KEY constraint failed")
    assert isinstance(handle_database_error(fk, "test"), ConstraintViolationError)


def test_operational_errors_map_to_503():
    err = handle_database_error(OperationalError("SELECT 1", {}, Exception("unable to open database file")), "test")
    assert err.status_code == 503


@pytest.fixture()
def error_client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    errors = {
        "duplicate-email": DuplicateEmailError(),
        "credentials": InvalidCredentialsError(),
        "duplicate-application": DuplicateApplicationError(),
        "constraint": ConstraintViolationError(),
        "not-found": NotFoundError(),
        "server": AppError("boom", status_code=500),
    }

    @app.get("/raise/{name}")
    def raise_error(name: str):
        raise errors[name]

    @app.get("/http")
    def raise_http():
        raise HTTPException(status_code=418, detail="teapot")

    @app.get("/operational")
    def raise_operational():
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    return TestClient(app)


@pytest.mark.parametrize(
    "name,status,message",
    [
        ("duplicate-email", 400, "Email already exists"),
        ("credentials", 401, "Invalid credentials"),
        ("duplicate-application", 400, "Already applied"),
        ("constraint", 400, None),
        ("not-found", 404, None),
        ("server", 500, "boom"),
    ],
)
def test_app_errors_render_as_json(error_client, name, status, message):
    r = error_client.get(f"/raise/{name}")
    assert r.status_code == status
    body = r.json()
    assert body["success"] is False
    assert body["error"]
    if message:
        assert body["error"] == message


def test_http_exceptions_use_error_shape(error_client):
    r = error_client.get("/http")
    assert r.status_code == 418
    assert r.json()["error"] == "teapot"


def test_store_unavailable_maps_to_503(error_client):
    r = error_client.get("/operational")
    assert r.status_code == 503
    assert "database" in r.json()["error"].lower()
