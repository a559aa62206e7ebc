"""
Admin moderation: list everything, delete users and jobs.

Deletes don't cascade and don't check existence. Removing a user or job that
other rows point at leaves those references dangling unless SQLite foreign key
enforcement is switched on, in which case the delete fails as a constraint
violation.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models.job import Job
from ..models.user import User
from ..utils.error_handlers import handle_database_error
from .accounts import user_to_public
from .jobs import job_to_public, jobs_with_employer

logger = logging.getLogger(__name__)


def list_users(db: Session) -> list[dict]:
    return [user_to_public(u) for u in db.query(User).order_by(User.id).all()]


def list_all_jobs(db: Session) -> list[dict]:
    """Every job, any status, with the employer's name."""
    rows = jobs_with_employer(db).order_by(Job.id).all()
    return [job_to_public(job, employer_name=name, include_employer=True) for job, name in rows]


def _delete_where(db: Session, model, row_id: int, operation: str) -> int:
    try:
        deleted = db.query(model).filter(model.id == row_id).delete(synchronize_session=False)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise handle_database_error(e, operation) from None
    except Exception:
        db.rollback()
        raise
    return deleted


def delete_user(db: Session, user_id: int) -> None:
    deleted = _delete_where(db, User, user_id, "deleting user")
    logger.info("Admin deleted user %s (%s row)", user_id, deleted)


def delete_job(db: Session, job_id: int) -> None:
    deleted = _delete_where(db, Job, job_id, "deleting job")
    logger.info("Admin deleted job %s (%s row)", job_id, deleted)
