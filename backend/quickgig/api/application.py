from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..services import applications as application_service
from ..utils.validation import MAX_ID, validate_application_status, validate_integer_field

router = APIRouter(prefix="/api/applications", tags=["Applications"])


class ApplicationCreate(BaseModel):
    job_id: int
    worker_id: int


class ApplicationStatusUpdate(BaseModel):
    status: str  # pending / accepted / rejected / completed


@router.post("")
def apply_to_job(payload: ApplicationCreate, db: Session = Depends(get_db)):
    job_id = validate_integer_field(payload.job_id, "Job ID", min_value=1, max_value=MAX_ID)
    worker_id = validate_integer_field(payload.worker_id, "Worker ID", min_value=1, max_value=MAX_ID)

    application_service.apply(db, job_id=job_id, worker_id=worker_id)
    return {"success": True}


@router.get("/worker/{worker_id:int}")
def list_worker_applications(worker_id: int = Path(le=MAX_ID), db: Session = Depends(get_db)):
    return application_service.list_applications_by_worker(db, worker_id)


@router.get("/job/{job_id:int}")
def list_job_applications(job_id: int = Path(le=MAX_ID), db: Session = Depends(get_db)):
    return application_service.list_applications_by_job(db, job_id)


@router.patch("/{application_id:int}")
def update_application_status(
    payload: ApplicationStatusUpdate,
    application_id: int = Path(le=MAX_ID),
    db: Session = Depends(get_db),
):
    status = validate_application_status(payload.status)
    application_service.set_application_status(db, application_id, status)
    return {"success": True}
