from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .. import crud
from ..database import get_db
from ..models import User
from ..schemas import (MessageOut, NoteCreate, NoteDetailOut, NoteOut, NoteUpdate,
                       RatingIn)
from ..security import (ensure_can_act_as, ensure_owner_or_admin,
                        get_current_user, require_admin)

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=list[NoteOut])
def list_notes(
    db: Session = Depends(get_db),
    user_id: int | None = Query(None, alias="userId"),
    requesting_user_id: int | None = Query(None, alias="requestingUserId"),
):
    notes = crud.notes.list_notes(
        db, author_id=user_id, requesting_user_id=requesting_user_id
    )
    return [NoteOut.model_validate(n) for n in notes]


@router.post("", response_model=NoteDetailOut, status_code=201)
def create_note(
    body: NoteCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_can_act_as(user, body.author_id)
    return NoteDetailOut.model_validate(crud.notes.create_note(db, body))


@router.get("/{note_id}", response_model=NoteDetailOut)
def get_note(note_id: int, db: Session = Depends(get_db)):
    return NoteDetailOut.model_validate(crud.notes.get_note(db, note_id))


@router.put("/{note_id}", response_model=NoteDetailOut)
def update_note(
    note_id: int,
    body: NoteUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_owner_or_admin(user, crud.notes.get_note(db, note_id).author_id)
    return NoteDetailOut.model_validate(crud.notes.update_note(db, note_id, body))


@router.delete("/{note_id}", response_model=MessageOut)
def delete_note(
    note_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_owner_or_admin(user, crud.notes.get_note(db, note_id).author_id)
    crud.notes.delete_note(db, note_id)
    return MessageOut(message="Note deleted successfully")


@router.put("/{note_id}/rating", response_model=NoteDetailOut)
def set_rating(
    note_id: int,
    body: RatingIn,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return NoteDetailOut.model_validate(crud.notes.set_rating(db, note_id, body.rating))
