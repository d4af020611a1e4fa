from datetime import datetime

from pydantic import BaseModel, Field


class StudentOut(BaseModel):
    id: int
    roster_number: str
    name: str
    username: str
    enrolled_at: datetime
    status_changed_at: datetime

    model_config = {"from_attributes": True}


class StudentRefOut(BaseModel):
    id: int
    name: str
    username: str

    model_config = {"from_attributes": True}


class PickRequest(BaseModel):
    query: str = Field(default="", max_length=100)


class SearchMatch(BaseModel):
    student: StudentRefOut
    score: float


class RosterEntryIn(BaseModel):
    roster_number: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=64)


class RosterImportRequest(BaseModel):
    entries: list[RosterEntryIn]


class RosterImportResponse(BaseModel):
    created: int
    updated: int
    dropped: int
    unchanged: int
