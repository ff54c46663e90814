from calendar import monthrange
from collections import Counter
from collections.abc import Iterable
from datetime import UTC, date, tzinfo

from .normalize import ViewNote

MAX_RECENT_NOTES = 5


def recent_notes(notes: Iterable[ViewNote], limit: int = MAX_RECENT_NOTES) -> list[ViewNote]:
    return sorted(notes, key=lambda n: n.updated_at, reverse=True)[:limit]


def _by_count(counter: Counter) -> list[tuple[str, int]]:
    return sorted(counter.items(), key=lambda kv: (-kv[1], kv[0]))


def count_by_province(notes: Iterable[ViewNote]) -> list[tuple[str, int]]:
    return _by_count(Counter(n.province for n in notes if n.province))


def count_by_category(notes: Iterable[ViewNote]) -> list[tuple[str, int]]:
    return _by_count(Counter(c.name for n in notes for c in n.categories))


def notes_per_day(
    notes: Iterable[ViewNote],
    month: date,
    tz: tzinfo = UTC,
) -> list[tuple[date, int]]:
    """Creation count for every day of ``month``, including empty days."""
    days = monthrange(month.year, month.month)[1]
    counts = {date(month.year, month.month, d): 0 for d in range(1, days + 1)}
    for note in notes:
        day = note.created_at.astimezone(tz).date()
        if day in counts:
            counts[day] += 1
    return sorted(counts.items())
