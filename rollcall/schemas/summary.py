from datetime import datetime

from pydantic import BaseModel


class SummaryItem(BaseModel):
    student_id: int
    name: str
    username: str
    points: int
    stale: bool

    model_config = {"from_attributes": True}


class SummaryResponse(BaseModel):
    stale: bool
    last_updated: datetime | None
    items: list[SummaryItem]
