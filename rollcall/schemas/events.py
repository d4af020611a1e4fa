from datetime import date, datetime

from pydantic import BaseModel, Field


class CategoryOut(BaseModel):
    id: int
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=25)


class EventRecordRequest(BaseModel):
    student_id: int
    category: int | str
    satisfactory: bool


class EventRecordResponse(BaseModel):
    id: int


class HistoryItemOut(BaseModel):
    event_id: int
    category: str
    created_at: datetime
    satisfactory: bool

    model_config = {"from_attributes": True}


class CorrectionItem(BaseModel):
    event_id: int
    satisfactory: bool


class CorrectionRequest(BaseModel):
    day: date
    edits: list[CorrectionItem] = Field(..., min_length=1)


class CorrectionResponse(BaseModel):
    ok: bool
    events: list[HistoryItemOut]
