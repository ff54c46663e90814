from datetime import date

from notekeeper.client.dashboard import (count_by_category, count_by_province,
                                         notes_per_day, recent_notes)
from notekeeper.client.normalize import normalize_note


def n(nid, created="2024-02-10T10:00:00Z", updated=None, province="", cats=()):
    return normalize_note(
        {
            "id": nid,
            "createdAt": created,
            "updatedAt": updated or created,
            "province": province,
            "categories": [{"id": c, "name": c} for c in cats],
        }
    )


def test_recent_notes_limit_and_order():
    notes = [n(i, updated=f"2024-02-{i:02d}T00:00:00Z") for i in range(1, 9)]
    assert [x.id for x in recent_notes(notes)] == [8, 7, 6, 5, 4]
    assert [x.id for x in recent_notes(notes, limit=2)] == [8, 7]


def test_counts_sorted_by_value():
    notes = [
        n(1, province="Tehran", cats=["Work"]),
        n(2, province="Shiraz", cats=["Work", "Home"]),
        n(3, province="Tehran"),
    ]
    assert count_by_province(notes) == [("Tehran", 2), ("Shiraz", 1)]
    assert count_by_category(notes) == [("Work", 2), ("Home", 1)]


def test_notes_per_day_zero_fills_month():
    notes = [
        n(1, created="2024-02-10T10:00:00Z"),
        n(2, created="2024-02-10T23:00:00Z"),
        n(3, created="2024-03-01T00:00:00Z"),
    ]
    days = notes_per_day(notes, date(2024, 2, 1))
    assert len(days) == 29
    assert days[0] == (date(2024, 2, 1), 0)
    assert dict(days)[date(2024, 2, 10)] == 2
    assert sum(count for _, count in days) == 2
