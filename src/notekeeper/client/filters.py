"""In-memory filtering of an already fetched note list."""

from collections.abc import Iterable
from datetime import UTC, date, datetime, time, tzinfo
from typing import Literal

from pydantic import BaseModel

from .normalize import ViewNote

ArchiveFilter = Literal["all", "archived", "unarchived"]
PublishFilter = Literal["all", "published", "unpublished"]


class NoteFilters(BaseModel):
    title: str = ""
    content: str = ""
    phone: str = ""
    date_from: date | None = None
    date_to: date | None = None
    categories: list[int | str] = []
    tags: list[str] = []
    provinces: list[str] = []
    archive: ArchiveFilter = "all"
    publish: PublishFilter = "all"


def _day_bounds(filters: NoteFilters, tz: tzinfo) -> tuple[datetime, datetime]:
    start = datetime.combine(filters.date_from, time.min, tzinfo=tz)
    last_day = filters.date_to or filters.date_from
    end = datetime.combine(last_day, time.max, tzinfo=tz)
    return start, end


def _has_category(note: ViewNote, wanted) -> bool:
    return any(wanted == c.id or wanted == c.name for c in note.categories)


def filter_notes(
    notes: Iterable[ViewNote],
    filters: NoteFilters,
    tz: tzinfo = UTC,
) -> list[ViewNote]:
    """Apply every engaged filter (all must match), newest update first.

    Categories and tags need every selected value on the note; provinces
    need the note's province to be any one of the selected values. Date
    bounds are whole days in ``tz``.
    """
    result = list(notes)

    if filters.title:
        needle = filters.title.lower()
        result = [n for n in result if needle in n.title.lower()]
    if filters.content:
        needle = filters.content.lower()
        result = [n for n in result if needle in n.content.lower()]
    if filters.phone:
        result = [n for n in result if any(filters.phone in p for p in n.phone_numbers)]

    if filters.date_from:
        start, end = _day_bounds(filters, tz)
        result = [n for n in result if start <= n.event_date <= end]

    if filters.categories:
        result = [
            n for n in result if all(_has_category(n, c) for c in filters.categories)
        ]
    if filters.tags:
        result = [n for n in result if all(t in n.tags for t in filters.tags)]
    if filters.provinces:
        result = [n for n in result if n.province in filters.provinces]

    if filters.archive == "archived":
        result = [n for n in result if n.is_archived]
    elif filters.archive == "unarchived":
        result = [n for n in result if not n.is_archived]

    if filters.publish == "published":
        result = [n for n in result if n.is_published]
    elif filters.publish == "unpublished":
        result = [n for n in result if not n.is_published]

    return sorted(result, key=lambda n: n.updated_at, reverse=True)


def active_filter_count(filters: NoteFilters) -> int:
    return (
        len(filters.categories)
        + len(filters.tags)
        + len(filters.provinces)
        + (1 if filters.archive != "all" else 0)
        + (1 if filters.publish != "all" else 0)
        + (1 if filters.title else 0)
        + (1 if filters.content else 0)
        + (1 if filters.phone else 0)
        + (1 if filters.date_from else 0)
    )


def available_categories(notes: Iterable[ViewNote]) -> list[str]:
    return sorted({c.name for n in notes for c in n.categories})


def available_tags(notes: Iterable[ViewNote]) -> list[str]:
    return sorted({t for n in notes for t in n.tags})


def available_provinces(notes: Iterable[ViewNote]) -> list[str]:
    return sorted({n.province for n in notes if n.province})
