"""Consumer-side helpers: API client, record normalisation, filtering and session state."""

from .api import ApiError, NotesClient
from .filters import NoteFilters, active_filter_count, filter_notes
from .normalize import ViewCategory, ViewComment, ViewNote, normalize_note
from .session import SessionContext

__all__ = [
    "ApiError",
    "NotesClient",
    "NoteFilters",
    "SessionContext",
    "ViewCategory",
    "ViewComment",
    "ViewNote",
    "active_filter_count",
    "filter_notes",
    "normalize_note",
]
