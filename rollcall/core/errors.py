"""Error kinds surfaced by the record-keeping core."""


class RollcallError(Exception):
    """Base error carrying a user-facing detail and a suggested status code."""

    status_code = 400

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class NoStudents(RollcallError):
    """Raised when a student is requested from an empty roster."""

    status_code = 409

    def __init__(self, detail: str = "No students on the roster") -> None:
        super().__init__(detail)


class UnknownStudent(RollcallError):
    status_code = 404


class UnknownCategory(RollcallError):
    status_code = 404


class EventNotFound(RollcallError):
    """Raised when a correction references an event outside the fetched window."""

    status_code = 409


class StoreError(RollcallError):
    """Wraps a persistence failure; the unit of work has been rolled back."""

    status_code = 500
