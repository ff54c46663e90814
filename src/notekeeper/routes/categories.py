from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import crud
from ..database import get_db
from ..models import User
from ..schemas import CategoryIn, CategoryOut
from ..security import require_admin

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return [CategoryOut.model_validate(c) for c in crud.categories.list_categories(db)]


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(
    body: CategoryIn,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return CategoryOut.model_validate(crud.categories.create_category(db, body.name))


@router.put("/{category_id}", response_model=CategoryOut)
def rename_category(
    category_id: int,
    body: CategoryIn,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    category = crud.categories.rename_category(db, category_id, body.name)
    return CategoryOut.model_validate(category)
