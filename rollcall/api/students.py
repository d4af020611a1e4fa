from datetime import date

from fastapi import APIRouter, Depends, Query

from rollcall.api.deps import get_classroom
from rollcall.schemas.events import CorrectionRequest, CorrectionResponse, HistoryItemOut
from rollcall.schemas.students import (
    PickRequest,
    RosterImportRequest,
    RosterImportResponse,
    SearchMatch,
    StudentOut,
    StudentRefOut,
)
from rollcall.services.classroom import Classroom
from rollcall.services.roster import RosterEntry, list_students

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=list[StudentOut])
def students_list(include_inactive: bool = False, classroom: Classroom = Depends(get_classroom)):
    return list_students(classroom.db, include_inactive=include_inactive)


@router.get("/search", response_model=list[SearchMatch])
def students_search(
    q: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(default=5, ge=1, le=50),
    classroom: Classroom = Depends(get_classroom),
):
    return [
        SearchMatch(student=StudentRefOut.model_validate(match.student), score=match.score)
        for match in classroom.index.search(q, limit=limit)
    ]


@router.post("/pick", response_model=StudentRefOut)
def pick_student(payload: PickRequest, classroom: Classroom = Depends(get_classroom)):
    return classroom.picker.pick(payload.query)


@router.post("/roster", response_model=RosterImportResponse)
def import_roster(payload: RosterImportRequest, classroom: Classroom = Depends(get_classroom)):
    entries = [RosterEntry(roster_number=item.roster_number, name=item.name, username=item.username) for item in payload.entries]
    result = classroom.import_roster(entries)
    return RosterImportResponse(
        created=result.created,
        updated=result.updated,
        dropped=result.dropped,
        unchanged=result.unchanged,
    )


@router.get("/{student_id}/events", response_model=list[HistoryItemOut])
def student_events(student_id: int, day: date, classroom: Classroom = Depends(get_classroom)):
    return classroom.redemption.fetch_window(student_id, day)


@router.post("/{student_id}/events/corrections", response_model=CorrectionResponse)
def correct_events(student_id: int, payload: CorrectionRequest, classroom: Classroom = Depends(get_classroom)):
    engine = classroom.redemption
    engine.fetch_window(student_id, payload.day)
    engine.apply_corrections({item.event_id: item.satisfactory for item in payload.edits})
    events = [HistoryItemOut.model_validate(item) for item in engine.fetch_window(student_id, payload.day)]
    return CorrectionResponse(ok=True, events=events)
