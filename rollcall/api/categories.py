from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rollcall.db.session import get_db
from rollcall.schemas.events import CategoryCreateRequest, CategoryOut
from rollcall.services.store import add_category, list_categories

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryOut])
def categories_list(db: Session = Depends(get_db)):
    return list_categories(db)


@router.post("", response_model=CategoryOut)
def create_category(payload: CategoryCreateRequest, db: Session = Depends(get_db)):
    return add_category(db, payload.name)
