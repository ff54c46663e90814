"""Turn raw API payloads into display records.

Every function here is total: malformed input yields a fallback value and a
log line, never an exception. Only the local display copy is affected.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ViewAuthor(BaseModel):
    id: int | str | None = None
    username: str = ""


class ViewCategory(BaseModel):
    id: int | str
    name: str


class ViewCategoryRecord(ViewCategory):
    created_at: datetime
    updated_at: datetime


class ViewComment(BaseModel):
    id: int | str | None = None
    content: str = ""
    note_id: int | str | None = None
    author_id: int | str | None = None
    author: ViewAuthor | None = None
    created_at: datetime
    updated_at: datetime


class ViewNote(BaseModel):
    id: int | str | None = None
    title: str = ""
    content: str = ""
    event_date: datetime
    tags: list[str] = []
    province: str = ""
    phone_numbers: list[str] = []
    is_archived: bool = False
    is_published: bool = False
    rating: int = 0
    author_id: int | str | None = None
    author: ViewAuthor | None = None
    categories: list[ViewCategory] = []
    comments: list[ViewComment] = []
    created_at: datetime
    updated_at: datetime


class ViewUser(BaseModel):
    id: int | str
    username: str
    role: str


def _now() -> datetime:
    return datetime.now(tz=UTC)


def parse_datetime(value: Any) -> datetime:
    """ISO-8601 string (or datetime) to an aware datetime; now() on failure."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            logger.warning("Unparseable date %r, using current time", value)
            return _now()
    else:
        return _now()
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def parse_string_list(value: Any, field: str = "list", record_id: Any = None) -> list[str]:
    """Accept a list or its JSON text form; anything unreadable becomes []."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError as exc:
            logger.warning("Failed to parse %s for %s: %r (%s)", field, record_id, value, exc)
            return []
    if not isinstance(value, list):
        logger.warning("Expected a list for %s of %s, got %r", field, record_id, value)
        return []
    return [str(v) for v in value]


def normalize_category(value: Any) -> ViewCategory:
    """Categories arrive as plain names or as ``{id, name}`` objects."""
    if isinstance(value, str):
        return ViewCategory(id=value, name=value)
    if isinstance(value, dict) and value.get("name"):
        name = str(value["name"])
        cid = value.get("id")
        return ViewCategory(id=cid if cid is not None else name, name=name)
    return ViewCategory(id=str(value), name=str(value))


def normalize_category_record(raw: dict) -> ViewCategoryRecord:
    base = normalize_category(raw)
    return ViewCategoryRecord(
        id=base.id,
        name=base.name,
        created_at=parse_datetime(raw.get("createdAt")),
        updated_at=parse_datetime(raw.get("updatedAt")),
    )


def _normalize_author(raw: Any) -> ViewAuthor | None:
    if not isinstance(raw, dict):
        return None
    return ViewAuthor(id=raw.get("id"), username=str(raw.get("username") or ""))


def normalize_comment(raw: dict) -> ViewComment:
    author = _normalize_author(raw.get("author"))
    return ViewComment(
        id=raw.get("id"),
        content=str(raw.get("content") or ""),
        note_id=raw.get("noteId"),
        author_id=raw.get("authorId") or (author.id if author else None),
        author=author,
        created_at=parse_datetime(raw.get("createdAt")),
        updated_at=parse_datetime(raw.get("updatedAt")),
    )


def normalize_note(raw: dict) -> ViewNote:
    note_id = raw.get("id")
    author = _normalize_author(raw.get("author"))
    categories = raw.get("categories")
    comments = raw.get("comments")
    rating = raw.get("rating")
    return ViewNote(
        id=note_id,
        title=str(raw.get("title") or ""),
        content=str(raw.get("content") or ""),
        event_date=parse_datetime(raw.get("eventDate") or raw.get("createdAt")),
        tags=parse_string_list(raw.get("tags"), "tags", note_id),
        province=str(raw.get("province") or ""),
        phone_numbers=parse_string_list(raw.get("phoneNumbers"), "phoneNumbers", note_id),
        is_archived=bool(raw.get("isArchived", False)),
        is_published=bool(raw.get("isPublished", False)),
        rating=rating if isinstance(rating, int) and not isinstance(rating, bool) else 0,
        author_id=raw.get("authorId") or (author.id if author else None),
        author=author,
        categories=[normalize_category(c) for c in categories] if isinstance(categories, list) else [],
        comments=[normalize_comment(c) for c in comments if isinstance(c, dict)]
        if isinstance(comments, list)
        else [],
        created_at=parse_datetime(raw.get("createdAt")),
        updated_at=parse_datetime(raw.get("updatedAt")),
    )
