from fastapi import Depends, Request
from sqlalchemy.orm import Session

from rollcall.db.session import get_db
from rollcall.services.classroom import Classroom


def get_classroom(request: Request, db: Session = Depends(get_db)):
    classroom = Classroom(
        db,
        index=getattr(request.app.state, "lookup_index", None),
        rng=getattr(request.app.state, "rng", None),
    )
    yield classroom
    if classroom.picker.built_index is not None:
        request.app.state.lookup_index = classroom.picker.built_index
