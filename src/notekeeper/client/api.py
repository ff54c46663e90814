import logging
from typing import Any

import httpx

from ..schemas import NoteCreate, NoteUpdate
from .normalize import (ViewCategoryRecord, ViewComment, ViewNote, ViewUser,
                        normalize_category_record, normalize_comment,
                        normalize_note)

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response; ``message`` is the server's text when it sent one."""

    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload


def _error_message(response: httpx.Response) -> tuple[str, Any]:
    fallback = f"Request failed with status: {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        logger.error(
            "Non-JSON error response from %s. Status: %s Body: %s",
            response.request.url,
            response.status_code,
            response.text,
        )
        return fallback, None
    if isinstance(payload, dict):
        for key in ("error", "message", "detail"):
            if isinstance(payload.get(key), str) and payload[key]:
                return payload[key], payload
    return fallback, payload


class NotesClient:
    """Thin wrapper over the HTTP API returning normalised records.

    Pass ``http`` to reuse an existing ``httpx.Client`` (a Starlette
    ``TestClient`` works too); otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http: httpx.Client | None = None,
        token: str | None = None,
    ):
        self._owns_http = http is None
        self.http = http or httpx.Client(base_url=base_url)
        self.token = token

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self.http.request(method, path, headers=self._headers(), **kwargs)
        if response.is_error:
            message, payload = _error_message(response)
            raise ApiError(response.status_code, message, payload)
        return response.json()

    # auth

    def login(self, username: str, password: str) -> tuple[ViewUser, str]:
        data = self._request(
            "POST", "/auth/login", json={"username": username, "password": password}
        )
        return ViewUser.model_validate(data["user"]), data["accessToken"]

    def me(self) -> ViewUser:
        return ViewUser.model_validate(self._request("GET", "/auth/me"))

    # notes

    def list_notes(
        self,
        user_id: int | None = None,
        requesting_user_id: int | None = None,
    ) -> list[ViewNote]:
        params = {}
        if user_id is not None:
            params["userId"] = user_id
        if requesting_user_id is not None:
            params["requestingUserId"] = requesting_user_id
        data = self._request("GET", "/notes", params=params)
        return [normalize_note(n) for n in data]

    def get_note(self, note_id: int) -> ViewNote:
        return normalize_note(self._request("GET", f"/notes/{note_id}"))

    def create_note(self, draft: NoteCreate) -> ViewNote:
        body = draft.model_dump(mode="json", by_alias=True, exclude_none=True)
        return normalize_note(self._request("POST", "/notes", json=body))

    def update_note(self, note_id: int, draft: NoteUpdate) -> ViewNote:
        body = draft.model_dump(mode="json", by_alias=True, exclude_none=True)
        body.pop("authorId", None)
        return normalize_note(self._request("PUT", f"/notes/{note_id}", json=body))

    def delete_note(self, note_id: int) -> str:
        return self._request("DELETE", f"/notes/{note_id}")["message"]

    def set_rating(self, note_id: int, rating: int) -> ViewNote:
        return normalize_note(
            self._request("PUT", f"/notes/{note_id}/rating", json={"rating": rating})
        )

    # comments

    def list_comments(self, note_id: int) -> list[ViewComment]:
        data = self._request("GET", f"/notes/{note_id}/comments")
        return [normalize_comment(c) for c in data]

    def add_comment(self, note_id: int, content: str, author_id: int) -> ViewComment:
        data = self._request(
            "POST",
            f"/notes/{note_id}/comments",
            json={"content": content, "authorId": author_id},
        )
        return normalize_comment(data)

    # categories

    def list_categories(self) -> list[ViewCategoryRecord]:
        data = self._request("GET", "/categories")
        return sorted((normalize_category_record(c) for c in data), key=lambda c: c.name)

    def create_category(self, name: str) -> ViewCategoryRecord:
        return normalize_category_record(self._request("POST", "/categories", json={"name": name}))

    def rename_category(self, category_id: int, name: str) -> ViewCategoryRecord:
        data = self._request("PUT", f"/categories/{category_id}", json={"name": name})
        return normalize_category_record(data)
