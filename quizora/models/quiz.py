"""
Quiz: belongs to a category, created by an admin, owns its ordered questions.
Deleting a quiz deletes its questions; certificates keep existing with quiz_id cleared.
"""
import uuid
from sqlalchemy import String, Integer, Text, Float, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizora.database import Base
from quizora.models.types import TimestampMixin, UuidType

DEFAULT_PASSING_SCORE = 70


class Quiz(TimestampMixin, Base):
    __tablename__ = "quizzes"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    passing_score: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_PASSING_SCORE)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False)
    time_limit: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    category_id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), ForeignKey("test_categories.id"), nullable=False, index=True
    )
    creator_id: Mapped[uuid.UUID | None] = mapped_column(
        UuidType(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        CheckConstraint("passing_score >= 0 AND passing_score <= 100", name="quizzes_passing_score_check"),
    )

    category = relationship("TestCategory", back_populates="quizzes")
    creator = relationship("User")
    questions = relationship(
        "Question", back_populates="quiz", cascade="all, delete-orphan", order_by="Question.sort_order"
    )
    purchasers = relationship("User", secondary="user_purchased_quizzes", back_populates="purchased_quizzes")
    # No delete cascade: the ORM nulls certificates.quiz_id when the quiz goes away.
    certificates = relationship("Certificate", back_populates="quiz")
