from rollcall.models.category import Category
from rollcall.models.history import HistoryEvent
from rollcall.models.metadata import StoreMetadata
from rollcall.models.status import Status
from rollcall.models.student import Student
from rollcall.models.summary import SummaryRow

__all__ = [
    "Category",
    "HistoryEvent",
    "Status",
    "Student",
    "StoreMetadata",
    "SummaryRow",
]
