from datetime import UTC, datetime
from typing import Annotated

from pydantic import (AfterValidator, BaseModel, BeforeValidator, ConfigDict,
                      Field)
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _list_or_empty(value):
    return [] if value is None else value


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]
StrList = Annotated[list[str], BeforeValidator(_list_or_empty)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(CamelModel):
    message: str


class LoginIn(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOut(CamelModel):
    id: int
    username: str
    role: str


class LoginOut(CamelModel):
    message: str
    user: UserOut
    access_token: str
    token_type: str = "bearer"


class AuthorOut(CamelModel):
    id: int
    username: str


class CategoryIn(CamelModel):
    name: str


class CategoryRef(CamelModel):
    id: int
    name: str


class CategoryOut(CategoryRef):
    created_at: UtcDatetime
    updated_at: UtcDatetime


class NoteUpdate(CamelModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    event_date: UtcDatetime
    province: str = Field(min_length=1)
    category_ids: list[int] | None = None
    tags: list[str] | None = None
    phone_numbers: list[str] | None = None
    is_archived: bool | None = None
    is_published: bool | None = None


class NoteCreate(NoteUpdate):
    author_id: int


class RatingIn(CamelModel):
    rating: int = Field(strict=True, ge=0, le=5)


class CommentCreate(CamelModel):
    content: str = Field(min_length=1)
    author_id: int


class CommentOut(CamelModel):
    id: int
    content: str
    note_id: int
    author_id: int
    author: AuthorOut
    created_at: UtcDatetime
    updated_at: UtcDatetime


class NoteOut(CamelModel):
    id: int
    title: str
    content: str
    event_date: UtcDatetime | None = None
    tags: StrList = []
    province: str = ""
    phone_numbers: StrList = []
    is_archived: bool = False
    is_published: bool = False
    rating: int = 0
    author_id: int
    author: AuthorOut
    categories: list[CategoryRef] = []
    created_at: UtcDatetime
    updated_at: UtcDatetime


class NoteDetailOut(NoteOut):
    comments: list[CommentOut] = []
