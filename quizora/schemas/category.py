"""
Test category schemas.
"""
from uuid import UUID
from pydantic import Field

from quizora.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class CategoryUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class CategoryResponse(CamelModel):
    id: UUID
    name: str
    description: str | None = None


class CategorySummary(CamelModel):
    id: UUID
    name: str
