"""
Account operations: signup, login and the bootstrap admin seed.

Passwords are stored and compared as plaintext. Login is an exact,
case-sensitive match on (email, password).
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD
from ..models.user import User
from ..utils.error_handlers import (
    DuplicateEmailError,
    InvalidCredentialsError,
    handle_database_error,
    is_duplicate_email,
)
from ..utils.formatting import format_timestamp

logger = logging.getLogger(__name__)


def user_to_public(user: User) -> dict:
    """User row without the password column."""
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "created_at": format_timestamp(user.created_at),
    }


def user_to_record(user: User) -> dict:
    """Full user row, password included (the login response contract)."""
    payload = user_to_public(user)
    payload["password"] = user.password
    return payload


def signup(db: Session, *, email: str, password: str, name: str | None, role: str) -> dict:
    user = User(email=email, password=password, name=name, role=role)
    try:
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_duplicate_email(e):
            logger.warning("Signup rejected, email already registered: %s", email)
            raise DuplicateEmailError() from None
        raise handle_database_error(e, "creating user") from None
    db.refresh(user)

    logger.info("User %s signed up as %s", user.id, user.role)
    return {"id": user.id, "email": user.email, "name": user.name, "role": user.role}


def login(db: Session, *, email: str, password: str) -> dict:
    user = (
        db.query(User)
        .filter(User.email == email, User.password == password)
        .first()
    )
    if not user:
        logger.warning("Failed login for %s", email)
        raise InvalidCredentialsError()
    return user_to_record(user)


def ensure_admin(db: Session) -> bool:
    """Seed the configured admin account unless some admin already exists. Returns True if seeded."""
    if db.query(User).filter(User.role == "admin").first():
        return False

    admin = User(email=ADMIN_EMAIL, password=ADMIN_PASSWORD, name=ADMIN_NAME, role="admin")
    try:
        db.add(admin)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.error("Cannot seed admin: %s is already registered with another role", ADMIN_EMAIL)
        raise

    logger.info("Seeded admin account %s", ADMIN_EMAIL)
    return True
