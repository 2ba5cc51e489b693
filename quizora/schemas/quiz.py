"""
Quiz and question schemas, plus the submission request/response.
"""
from datetime import datetime
from typing import Any
from uuid import UUID
from pydantic import Field, field_validator, model_validator

from quizora.schemas.common import CamelModel
from quizora.schemas.category import CategorySummary


class QuestionPayload(CamelModel):
    question_text: str = Field(min_length=1)
    options: list[str] = Field(min_length=2)
    correct_answer_index: int = Field(ge=0)
    explanation: str | None = None

    @field_validator("options")
    @classmethod
    def options_not_blank(cls, v: list[str]) -> list[str]:
        if any(not (o or "").strip() for o in v):
            raise ValueError("options must be non-empty strings")
        return v

    @model_validator(mode="after")
    def correct_index_in_range(self):
        if self.correct_answer_index >= len(self.options):
            raise ValueError("correctAnswerIndex must point at one of the options")
        return self


class QuizCreate(CamelModel):
    category_id: UUID
    title: str = Field(min_length=1, max_length=512)
    description: str | None = None
    questions: list[QuestionPayload] = Field(min_length=1)
    passing_score: float = Field(default=70, ge=0, le=100)
    total_points: int = Field(ge=1)
    time_limit: int | None = Field(default=None, ge=1)  # minutes


class QuizUpdate(CamelModel):
    """Partial update. When questions is set, the whole collection is replaced."""
    category_id: UUID | None = None
    title: str | None = Field(default=None, min_length=1, max_length=512)
    description: str | None = None
    questions: list[QuestionPayload] | None = Field(default=None, min_length=1)
    passing_score: float | None = Field(default=None, ge=0, le=100)
    total_points: int | None = Field(default=None, ge=1)
    time_limit: int | None = Field(default=None, ge=1)


class QuestionResponse(CamelModel):
    id: UUID
    sort_order: int
    question_text: str
    options: list[str]
    # Only filled for admins; players must not see the answer key
    correct_answer_index: int | None = None
    explanation: str | None = None


class QuizResponse(CamelModel):
    id: UUID
    title: str
    description: str | None = None
    passing_score: float
    total_points: int
    time_limit: int | None = None
    category_id: UUID
    category: CategorySummary | None = None
    creator_id: UUID | None = None
    question_count: int
    questions: list[QuestionResponse]
    created_at: datetime | None = None


class QuizSubmitRequest(CamelModel):
    # Items are not typed: non-integer entries simply do not match
    answers: list[Any]


class QuizSubmitResponse(CamelModel):
    passed: bool
    score: float
    certificate_id: str | None = None
