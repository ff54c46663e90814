import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from ..errors import ForeignKeyError, NotFoundError, ValidationError
from ..models import Category, Comment, Note, User, utcnow
from ..schemas import NoteCreate, NoteUpdate

logger = logging.getLogger(__name__)

MIN_RATING = 0
MAX_RATING = 5


def _list_options():
    return (selectinload(Note.categories), joinedload(Note.author))


def _detail_options():
    return (
        selectinload(Note.categories),
        joinedload(Note.author),
        selectinload(Note.comments).joinedload(Comment.author),
    )


def _resolve_categories(db: Session, category_ids, error_cls) -> list[Category]:
    ids = list(dict.fromkeys(category_ids or []))
    if not ids:
        return []
    found = db.query(Category).filter(Category.id.in_(ids)).all()
    missing = sorted(set(ids) - {c.id for c in found})
    if missing:
        raise error_cls(
            "Invalid category ID.",
            details={"missing_category_ids": missing},
        )
    by_id = {c.id: c for c in found}
    return [by_id[i] for i in ids]


def _commit_references(db: Session, error_cls) -> None:
    try:
        db.commit()
    except IntegrityError:
        # a referenced author or category vanished after it was checked
        db.rollback()
        raise error_cls("Invalid author or category ID.") from None


def list_notes(
    db: Session,
    author_id: int | None = None,
    requesting_user_id: int | None = None,
) -> list[Note]:
    """All notes, newest update first.

    ``author_id`` restricts to one author's notes. ``requesting_user_id``
    restricts to published notes plus that user's own notes.
    """
    query = db.query(Note).options(*_list_options())
    if author_id is not None:
        query = query.filter(Note.author_id == author_id)
    elif requesting_user_id is not None:
        query = query.filter(
            or_(Note.is_published.is_(True), Note.author_id == requesting_user_id)
        )
    return query.order_by(Note.updated_at.desc(), Note.id.desc()).all()


def get_note(db: Session, note_id: int) -> Note:
    note = (
        db.query(Note)
        .options(*_detail_options())
        .filter(Note.id == note_id)
        .first()
    )
    if note is None:
        raise NotFoundError("Note not found")
    return note


def create_note(db: Session, body: NoteCreate) -> Note:
    if db.get(User, body.author_id) is None:
        raise ForeignKeyError(
            "Invalid author or category ID.",
            details={"missing_author_id": body.author_id},
        )
    categories = _resolve_categories(db, body.category_ids, ForeignKeyError)
    note = Note(
        title=body.title,
        content=body.content,
        event_date=body.event_date,
        tags=list(body.tags or []),
        province=body.province,
        phone_numbers=list(body.phone_numbers or []),
        is_archived=bool(body.is_archived),
        is_published=bool(body.is_published),
        author_id=body.author_id,
        categories=categories,
    )
    db.add(note)
    _commit_references(db, ForeignKeyError)
    logger.info("Created note %s by user %s", note.id, note.author_id)
    db.expire_all()
    return get_note(db, note.id)


def update_note(db: Session, note_id: int, body: NoteUpdate) -> Note:
    """Replace every editable field; the author never changes."""
    note = get_note(db, note_id)
    categories = _resolve_categories(db, body.category_ids, ValidationError)
    note.title = body.title
    note.content = body.content
    note.event_date = body.event_date
    note.tags = list(body.tags or [])
    note.province = body.province
    note.phone_numbers = list(body.phone_numbers or [])
    note.is_archived = bool(body.is_archived)
    note.is_published = bool(body.is_published)
    note.categories = categories
    note.updated_at = utcnow()
    _commit_references(db, ValidationError)
    logger.info("Updated note %s", note.id)
    db.expire_all()
    return get_note(db, note_id)


def delete_note(db: Session, note_id: int) -> None:
    note = db.get(Note, note_id)
    if note is None:
        raise NotFoundError("Note not found")
    comments = db.query(Comment).filter(Comment.note_id == note_id).all()
    for comment in comments:
        db.delete(comment)
    db.flush()
    db.expire(note, ["comments"])
    db.delete(note)
    db.commit()
    logger.info("Deleted note %s and %d comment(s)", note_id, len(comments))


def set_rating(db: Session, note_id: int, rating) -> Note:
    if (
        isinstance(rating, bool)
        or not isinstance(rating, int)
        or not MIN_RATING <= rating <= MAX_RATING
    ):
        raise ValidationError(
            f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}"
        )
    note = db.get(Note, note_id)
    if note is None:
        raise NotFoundError("Note not found")
    note.rating = rating
    note.updated_at = utcnow()
    db.commit()
    logger.info("Rated note %s: %d", note_id, rating)
    db.expire_all()
    return get_note(db, note_id)
