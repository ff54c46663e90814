import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import Category, utcnow

logger = logging.getLogger(__name__)


def _clean_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Category name is required and must be a non-empty string")
    return name.strip()


def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name).all()


def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def _name_taken(db: Session, name: str, exclude_id: int | None = None) -> bool:
    query = db.query(Category.id).filter(Category.name == name)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def _commit_unique(db: Session, name: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent insert/rename of the same name
        db.rollback()
        raise ConflictError(f'A category with the name "{name}" already exists.') from None


def create_category(db: Session, name) -> Category:
    name = _clean_name(name)
    if _name_taken(db, name):
        raise ConflictError(f'A category with the name "{name}" already exists.')
    category = Category(name=name)
    db.add(category)
    _commit_unique(db, name)
    db.refresh(category)
    logger.info("Created category %s (%s)", category.id, category.name)
    return category


def rename_category(db: Session, category_id: int, name) -> Category:
    name = _clean_name(name)
    category = get_category(db, category_id)
    if _name_taken(db, name, exclude_id=category.id):
        raise ConflictError(f'A category with the name "{name}" already exists.')
    category.name = name
    category.updated_at = utcnow()
    _commit_unique(db, name)
    db.refresh(category)
    logger.info("Renamed category %s to %s", category.id, category.name)
    return category


def upsert_category(db: Session, name: str) -> Category:
    name = _clean_name(name)
    category = db.query(Category).filter(Category.name == name).first()
    if category:
        return category
    return create_category(db, name)
