from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..services import accounts
from ..utils.validation import validate_email, validate_password, validate_role

router = APIRouter(prefix="/api/auth", tags=["Auth"])


class SignupRequest(BaseModel):
    email: str
    password: str
    name: str | None = None
    role: str  # employer / worker / admin


class LoginRequest(BaseModel):
    email: str
    password: str


@router.post("/signup")
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    email = validate_email(payload.email)
    validate_password(payload.password)
    role = validate_role(payload.role)

    return accounts.signup(
        db,
        email=email,
        password=payload.password,
        name=payload.name,
        role=role,
    )


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    # No format checks here: a malformed email simply matches nobody.
    return accounts.login(db, email=payload.email, password=payload.password)
