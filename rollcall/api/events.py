from fastapi import APIRouter, Depends

from rollcall.api.deps import get_classroom
from rollcall.schemas.events import EventRecordRequest, EventRecordResponse
from rollcall.services.classroom import Classroom

router = APIRouter(prefix="/events", tags=["events"])


@router.post("", response_model=EventRecordResponse)
def record_event(payload: EventRecordRequest, classroom: Classroom = Depends(get_classroom)):
    event_id = classroom.recorder.record(payload.student_id, payload.category, payload.satisfactory)
    return EventRecordResponse(id=event_id)
