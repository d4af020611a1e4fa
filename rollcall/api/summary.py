import io

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from rollcall.api.deps import get_classroom
from rollcall.schemas.summary import SummaryItem, SummaryResponse
from rollcall.services.classroom import Classroom
from rollcall.services.gate import build_export, write_export
from rollcall.services.store import get_metadata

router = APIRouter(prefix="/summary", tags=["summary"])


def _summary_response(classroom: Classroom) -> SummaryResponse:
    metadata = get_metadata(classroom.db)
    return SummaryResponse(
        stale=classroom.summary.is_stale(),
        last_updated=metadata.summary_last_updated if metadata else None,
        items=[SummaryItem.model_validate(entry) for entry in classroom.summary.get_summary()],
    )


@router.get("", response_model=SummaryResponse)
def get_summary(classroom: Classroom = Depends(get_classroom)):
    return _summary_response(classroom)


@router.post("/refresh", response_model=SummaryResponse)
def refresh_summary(classroom: Classroom = Depends(get_classroom)):
    classroom.summary.refresh_all()
    return _summary_response(classroom)


@router.get("/export", response_class=PlainTextResponse)
def export_summary(classroom: Classroom = Depends(get_classroom)):
    buffer = io.StringIO()
    write_export(build_export(classroom.db, policy=classroom.summary.policy), buffer)
    return PlainTextResponse(buffer.getvalue(), media_type="text/tab-separated-values")
