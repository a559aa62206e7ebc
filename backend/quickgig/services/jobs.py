"""
Job operations.

A job is created open and only ever moves to completed, through complete_job.
Completing a job also completes every accepted application on it; both updates
commit together.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.application import Application
from ..models.job import Job
from ..models.user import User
from ..utils.error_handlers import handle_database_error
from ..utils.formatting import format_timestamp

logger = logging.getLogger(__name__)


def job_to_public(job: Job, *, employer_name: str | None = None, include_employer: bool = False) -> dict:
    payload = {
        "id": job.id,
        "employer_id": job.employer_id,
        "title": job.title,
        "description": job.description,
        "location": job.location,
        "date": job.date,
        "duration": job.duration,
        "payment": job.payment,
        "status": job.status,
        "created_at": format_timestamp(job.created_at),
    }
    if include_employer:
        payload["employer_name"] = employer_name
    return payload


def jobs_with_employer(db: Session):
    # Inner join: jobs whose employer row is gone drop out of these listings.
    return (
        db.query(Job, User.name.label("employer_name"))
        .join(User, Job.employer_id == User.id)
    )


def list_open_jobs(db: Session, *, location: str | None = None, date: str | None = None) -> list[dict]:
    """
    Open jobs with their employer's name.

    `location` is a case-insensitive substring match (taken literally, `%` and `_`
    included); `date` must match exactly.
    """
    q = jobs_with_employer(db).filter(Job.status == "open")
    if location:
        q = q.filter(Job.location.icontains(location, autoescape=True))
    if date:
        q = q.filter(Job.date == date)

    rows = q.order_by(Job.id).all()
    return [job_to_public(job, employer_name=name, include_employer=True) for job, name in rows]


def create_job(
    db: Session,
    *,
    employer_id: int,
    title: str | None,
    description: str | None,
    location: str | None,
    date: str | None,
    duration: str | None,
    payment: float | None,
) -> int:
    job = Job(
        employer_id=employer_id,
        title=title,
        description=description,
        location=location,
        date=date,
        duration=duration,
        payment=payment,
    )
    try:
        db.add(job)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise handle_database_error(e, "creating job") from None
    db.refresh(job)

    logger.info("Employer %s posted job %s", employer_id, job.id)
    return job.id


def list_jobs_by_employer(db: Session, employer_id: int) -> list[dict]:
    jobs = db.query(Job).filter(Job.employer_id == employer_id).order_by(Job.id).all()
    return [job_to_public(j) for j in jobs]


def complete_job(db: Session, job_id: int) -> int:
    """
    Mark the job completed and move its accepted applications to completed.

    Returns how many applications were transitioned. Unknown ids update nothing.
    Calling it again on a completed job is harmless.
    """
    try:
        db.query(Job).filter(Job.id == job_id).update(
            {Job.status: "completed"}, synchronize_session=False
        )
        transitioned = (
            db.query(Application)
            .filter(Application.job_id == job_id, Application.status == "accepted")
            .update({Application.status: "completed"}, synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Job %s completed; %s accepted application(s) completed", job_id, transitioned)
    return transitioned
