from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from ..database import get_db
from ..services import admin as admin_service
from ..utils.validation import MAX_ID

# Moderation endpoints. There is no session layer, so nothing gates them by role.
router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/users")
def list_users(db: Session = Depends(get_db)):
    return admin_service.list_users(db)


@router.get("/jobs")
def list_jobs(db: Session = Depends(get_db)):
    return admin_service.list_all_jobs(db)


@router.delete("/users/{user_id:int}")
def delete_user(user_id: int = Path(le=MAX_ID), db: Session = Depends(get_db)):
    admin_service.delete_user(db, user_id)
    return {"success": True}


@router.delete("/jobs/{job_id:int}")
def delete_job(job_id: int = Path(le=MAX_ID), db: Session = Depends(get_db)):
    admin_service.delete_job(db, job_id)
    return {"success": True}
