"""
Certificate: issued once per (user, quiz) pass. certificate_code is the public,
human-readable id (CERT-<year>-<8 hex>); id is the storage key.
The (user_id, quiz_id) unique constraint is what makes issuance idempotent under concurrency.
"""
import uuid
from datetime import datetime
from sqlalchemy import String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from quizora.database import Base
from quizora.models.types import TimestampMixin, UuidType


class Certificate(TimestampMixin, Base):
    __tablename__ = "certificates"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        UuidType(), ForeignKey("test_categories.id", ondelete="SET NULL"), nullable=True
    )
    quiz_id: Mapped[uuid.UUID | None] = mapped_column(
        UuidType(), ForeignKey("quizzes.id", ondelete="SET NULL"), nullable=True, index=True
    )
    score: Mapped[float] = mapped_column(Float, nullable=False)
    issue_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    certificate_code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)

    __table_args__ = (UniqueConstraint("user_id", "quiz_id", name="certificates_user_quiz_key"),)

    user = relationship("User", back_populates="certificates")
    category = relationship("TestCategory")
    quiz = relationship("Quiz", back_populates="certificates")
