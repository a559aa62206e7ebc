from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..database import get_db
from ..services import jobs as job_service
from ..utils.validation import MAX_ID, validate_integer_field, validate_string_field

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


class JobCreate(BaseModel):
    employer_id: int
    title: str = Field(max_length=255)
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)
    date: str | None = Field(default=None, max_length=50)  # e.g. "2024-06-01"
    duration: str | None = Field(default=None, max_length=100)
    payment: float | None = None


@router.get("")
def list_jobs(
    location: str | None = Query(default=None, description="Case-insensitive substring of the job location"),
    date: str | None = Query(default=None, description="Exact job date"),
    db: Session = Depends(get_db),
):
    return job_service.list_open_jobs(db, location=location or None, date=date or None)


@router.post("")
def create_job(payload: JobCreate, db: Session = Depends(get_db)):
    employer_id = validate_integer_field(payload.employer_id, "Employer ID", min_value=1, max_value=MAX_ID)
    title = validate_string_field(payload.title, "Title", min_length=1, max_length=255)

    job_id = job_service.create_job(
        db,
        employer_id=employer_id,
        title=title,
        description=payload.description,
        location=payload.location,
        date=payload.date,
        duration=payload.duration,
        payment=payload.payment,
    )
    return {"id": job_id}


@router.get("/employer/{employer_id:int}")
def list_employer_jobs(employer_id: int = Path(le=MAX_ID), db: Session = Depends(get_db)):
    return job_service.list_jobs_by_employer(db, employer_id)


@router.patch("/{job_id:int}/complete")
def complete_job(job_id: int = Path(le=MAX_ID), db: Session = Depends(get_db)):
    job_service.complete_job(db, job_id)
    return {"success": True}
