from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rollcall.api.deps import get_classroom
from rollcall.core.config import get_settings
from rollcall.db.session import get_db
from rollcall.services.classroom import Classroom
from rollcall.services.store import get_metadata

router = APIRouter(tags=["system"])


@router.get("/health")
def health():
    settings = get_settings()
    return {"status": "ok", "version": settings.app_version}


@router.get("/system/info")
def system_info(db: Session = Depends(get_db), classroom: Classroom = Depends(get_classroom)):
    settings = get_settings()
    metadata = get_metadata(db)
    return {
        "app_name": settings.app_name,
        "app_env": settings.app_env,
        "app_version": settings.app_version,
        "first_created": metadata.first_created if metadata else None,
        "last_opened": metadata.last_opened if metadata else None,
        "summary_last_updated": metadata.summary_last_updated if metadata else None,
        "summary_stale": classroom.summary.is_stale(),
        "active_students": len(classroom.index),
    }
