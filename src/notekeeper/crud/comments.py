import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ..errors import NotFoundError, ValidationError
from ..models import Comment, Note, User

logger = logging.getLogger(__name__)


def list_comments(db: Session, note_id: int) -> list[Comment]:
    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.note_id == note_id)
        .order_by(Comment.created_at, Comment.id)
        .all()
    )


def create_comment(db: Session, note_id: int, content: str | None, author_id: int | None) -> Comment:
    if not content or author_id is None:
        raise ValidationError("Content and authorId are required")
    if db.get(Note, note_id) is None:
        raise NotFoundError("Note not found")
    if db.get(User, author_id) is None:
        raise ValidationError("Author not found")
    comment = Comment(content=content, note_id=note_id, author_id=author_id)
    db.add(comment)
    try:
        db.commit()
    except IntegrityError:
        # note or author deleted after the checks above
        db.rollback()
        raise ValidationError("Note or author not found") from None
    logger.info("Added comment %s to note %s", comment.id, note_id)
    return (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.id == comment.id)
        .one()
    )
