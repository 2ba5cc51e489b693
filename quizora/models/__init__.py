"""
SQLAlchemy models. Import here so Alembic and app can use them.
"""
from quizora.models.user import User, user_purchased_quizzes
from quizora.models.category import TestCategory
from quizora.models.course import Course
from quizora.models.quiz import Quiz
from quizora.models.question import Question
from quizora.models.certificate import Certificate

__all__ = ["User", "user_purchased_quizzes", "TestCategory", "Course", "Quiz", "Question", "Certificate"]
