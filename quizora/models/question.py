"""
Question: one multiple-choice item of a Quiz. Position is sort_order (0-based);
submissions are matched by position, not by id.
"""
import uuid
from sqlalchemy import Integer, Text, ForeignKey
from sqlalchemy.types import JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizora.database import Base
from quizora.models.types import TimestampMixin, UuidType


class Question(TimestampMixin, Base):
    __tablename__ = "questions"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    quiz_id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[list] = mapped_column(JSON, nullable=False)  # ["...", "...", ...] (2 or more)
    correct_answer_index: Mapped[int] = mapped_column(Integer, nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)

    quiz = relationship("Quiz", back_populates="questions")
