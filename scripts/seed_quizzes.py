#!/usr/bin/env python3
"""
Seed demo data: a "General Knowledge" category, an admin user, and ten mock quizzes
with ten questions each. Existing quizzes are deleted first (their certificates are kept).
Run from the project dir: python scripts/seed_quizzes.py
"""
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

logger = logging.getLogger("seed_quizzes")

ADMIN_EMAIL = "admin@quizora.com"
ADMIN_PASSWORD = "password123"
CATEGORY_NAME = "General Knowledge"
QUIZ_COUNT = 10
QUESTIONS_PER_QUIZ = 10


def build_questions(quiz_no: int) -> list:
    from quizora.models import Question
    return [
        Question(
            sort_order=j - 1,
            question_text=f"Question {j} for Quiz {quiz_no}: What is {j} + {quiz_no}?",
            options=[str(j + quiz_no), str(j + quiz_no + 1), str(j + quiz_no - 1), str(j * quiz_no)],
            correct_answer_index=0,
            explanation=f"{j} + {quiz_no} = {j + quiz_no}.",
        )
        for j in range(1, QUESTIONS_PER_QUIZ + 1)
    ]


def seed() -> int:
    from quizora.database import SessionLocal, init_sqlite_db
    from quizora.models import Quiz, TestCategory, User
    from quizora.models.user import ROLE_ADMIN
    from quizora.services.auth import hash_password

    init_sqlite_db()
    db = SessionLocal()
    try:
        category = db.query(TestCategory).filter(TestCategory.name == CATEGORY_NAME).first()
        if not category:
            category = TestCategory(
                name=CATEGORY_NAME,
                description="A category for testing various general knowledge topics.",
            )
            db.add(category)
            db.flush()
            logger.info("Created category: %s", CATEGORY_NAME)

        admin = db.query(User).filter(User.role == ROLE_ADMIN).first()
        if not admin:
            admin = User(
                name="Admin User",
                email=ADMIN_EMAIL,
                password_hash=hash_password(ADMIN_PASSWORD),
                role=ROLE_ADMIN,
            )
            db.add(admin)
            db.flush()
            logger.info("Created admin user: %s", ADMIN_EMAIL)

        for quiz in db.query(Quiz).all():
            db.delete(quiz)
        db.flush()

        for i in range(1, QUIZ_COUNT + 1):
            db.add(
                Quiz(
                    title=f"Mock Quiz {i}: Advanced Patterns",
                    description="Arithmetic warm-up quiz.",
                    category_id=category.id,
                    creator_id=admin.id,
                    passing_score=70,
                    total_points=100,
                    time_limit=20,
                    questions=build_questions(i),
                )
            )
        db.commit()
        logger.info("Seeded %s quizzes with %s questions each", QUIZ_COUNT, QUESTIONS_PER_QUIZ)
        return 0
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(seed())
