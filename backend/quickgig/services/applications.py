"""
Application operations.

A worker applies to a job at most once. Status changes are plain overwrites;
the only automatic transition (accepted -> completed) lives in jobs.complete_job.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.application import Application
from ..models.job import Job
from ..models.user import User
from ..utils.error_handlers import DuplicateApplicationError, handle_database_error, is_duplicate_application
from ..utils.formatting import format_timestamp

logger = logging.getLogger(__name__)


def _application_base(a: Application) -> dict:
    return {
        "id": a.id,
        "job_id": a.job_id,
        "worker_id": a.worker_id,
        "status": a.status,
        "created_at": format_timestamp(a.created_at),
    }


def apply(db: Session, *, job_id: int, worker_id: int) -> int:
    application = Application(job_id=job_id, worker_id=worker_id)
    try:
        db.add(application)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_duplicate_application(e):
            logger.warning("Worker %s already applied to job %s", worker_id, job_id)
            raise DuplicateApplicationError() from None
        raise handle_database_error(e, "creating application") from None
    db.refresh(application)

    logger.info("Worker %s applied to job %s", worker_id, job_id)
    return application.id


def list_applications_by_worker(db: Session, worker_id: int) -> list[dict]:
    """A worker's applications with the job details and the employer's name."""
    rows = (
        db.query(
            Application,
            Job.title,
            Job.location,
            Job.date,
            Job.payment,
            User.name.label("employer_name"),
        )
        .join(Job, Application.job_id == Job.id)
        .join(User, Job.employer_id == User.id)
        .filter(Application.worker_id == worker_id)
        .order_by(Application.id)
        .all()
    )

    items = []
    for a, title, location, date, payment, employer_name in rows:
        payload = _application_base(a)
        payload.update(
            {
                "title": title,
                "location": location,
                "date": date,
                "payment": payment,
                "employer_name": employer_name,
            }
        )
        items.append(payload)
    return items


def list_applications_by_job(db: Session, job_id: int) -> list[dict]:
    """Applications on a job with each worker's name and email."""
    rows = (
        db.query(Application, User.name.label("worker_name"), User.email.label("worker_email"))
        .join(User, Application.worker_id == User.id)
        .filter(Application.job_id == job_id)
        .order_by(Application.id)
        .all()
    )

    items = []
    for a, worker_name, worker_email in rows:
        payload = _application_base(a)
        payload["worker_name"] = worker_name
        payload["worker_email"] = worker_email
        items.append(payload)
    return items


def set_application_status(db: Session, application_id: int, status: str) -> None:
    # Unknown ids update nothing.
    try:
        updated = (
            db.query(Application)
            .filter(Application.id == application_id)
            .update({Application.status: status}, synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Application %s set to %s (%s row)", application_id, status, updated)
