from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import crud
from ..database import get_db
from ..models import User
from ..schemas import CommentCreate, CommentOut
from ..security import ensure_can_act_as, get_current_user

router = APIRouter(prefix="/notes/{note_id}/comments", tags=["comments"])


@router.get("", response_model=list[CommentOut])
def list_comments(note_id: int, db: Session = Depends(get_db)):
    return [CommentOut.model_validate(c) for c in crud.comments.list_comments(db, note_id)]


@router.post("", response_model=CommentOut, status_code=201)
def add_comment(
    note_id: int,
    body: CommentCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ensure_can_act_as(user, body.author_id)
    comment = crud.comments.create_comment(db, note_id, body.content, body.author_id)
    return CommentOut.model_validate(comment)
