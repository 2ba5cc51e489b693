"""
TestCategory: groups quizzes. Name is unique; admin-managed.
"""
import uuid
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizora.database import Base
from quizora.models.types import TimestampMixin, UuidType


class TestCategory(TimestampMixin, Base):
    __tablename__ = "test_categories"
    __test__ = False  # not a pytest test class

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    quizzes = relationship("Quiz", back_populates="category")
