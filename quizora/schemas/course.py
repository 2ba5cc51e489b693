"""
Course schemas. contentUrl and thumbnail accept an http(s) URL or an empty string.
"""
from urllib.parse import urlparse
from uuid import UUID
from pydantic import Field, field_validator

from quizora.schemas.common import CamelModel


def _url_or_empty(v: str | None) -> str | None:
    if v is None or v == "":
        return v
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid URL")
    return v


class CourseCreate(CamelModel):
    title: str = Field(min_length=1, max_length=512)
    description: str | None = None
    content_url: str | None = None
    thumbnail: str | None = None

    @field_validator("content_url", "thumbnail")
    @classmethod
    def url_shape(cls, v: str | None) -> str | None:
        return _url_or_empty(v)


class CourseUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=512)
    description: str | None = None
    content_url: str | None = None
    thumbnail: str | None = None

    @field_validator("content_url", "thumbnail")
    @classmethod
    def url_shape(cls, v: str | None) -> str | None:
        return _url_or_empty(v)


class CourseResponse(CamelModel):
    id: UUID
    title: str
    description: str | None = None
    content_url: str | None = None
    thumbnail: str | None = None
