"""
Quizzes API: list (optional categoryId filter), get, create, update, delete, submit.
Questions are written together with their quiz in one transaction; an update that sends
questions replaces the whole collection. Submission scores by position and issues a
certificate on pass.
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, selectinload

from quizora.database import get_db
from quizora.models.category import TestCategory
from quizora.models.question import Question
from quizora.models.quiz import Quiz
from quizora.models.user import User
from quizora.schemas.category import CategorySummary
from quizora.schemas.common import MessageResponse
from quizora.schemas.quiz import (
    QuestionPayload,
    QuestionResponse,
    QuizCreate,
    QuizResponse,
    QuizSubmitRequest,
    QuizSubmitResponse,
    QuizUpdate,
)
from quizora.api.deps import get_current_user, get_optional_user, require_admin
from quizora.services.certificates import issue_certificate
from quizora.services.scoring import EmptyQuizError, is_passing, score_answers

router = APIRouter(prefix="/quizzes", tags=["quizzes"])
logger = logging.getLogger(__name__)


def _question_to_response(q: Question, include_answers: bool) -> QuestionResponse:
    return QuestionResponse(
        id=q.id,
        sort_order=q.sort_order,
        question_text=q.question_text,
        options=list(q.options or []),
        correct_answer_index=q.correct_answer_index if include_answers else None,
        explanation=q.explanation if include_answers else None,
    )


def _quiz_to_response(quiz: Quiz, include_answers: bool = False) -> QuizResponse:
    return QuizResponse(
        id=quiz.id,
        title=quiz.title,
        description=quiz.description,
        passing_score=quiz.passing_score,
        total_points=quiz.total_points,
        time_limit=quiz.time_limit,
        category_id=quiz.category_id,
        category=CategorySummary.model_validate(quiz.category) if quiz.category else None,
        creator_id=quiz.creator_id,
        question_count=len(quiz.questions),
        questions=[_question_to_response(q, include_answers) for q in quiz.questions],
        created_at=quiz.created_at,
    )


def _build_questions(payloads: list[QuestionPayload]) -> list[Question]:
    return [
        Question(
            sort_order=i,
            question_text=p.question_text,
            options=list(p.options),
            correct_answer_index=p.correct_answer_index,
            explanation=p.explanation,
        )
        for i, p in enumerate(payloads)
    ]


def _load_quiz(db: Session, quiz_id: UUID) -> Quiz:
    quiz = (
        db.query(Quiz)
        .options(selectinload(Quiz.questions), selectinload(Quiz.category))
        .filter(Quiz.id == quiz_id)
        .first()
    )
    if not quiz:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")
    return quiz


def _ensure_category(db: Session, category_id: UUID) -> None:
    if not db.query(TestCategory.id).filter(TestCategory.id == category_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")


@router.get("", response_model=list[QuizResponse])
def list_quizzes(
    category_id: UUID | None = Query(default=None, alias="categoryId"),
    current_user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """List quizzes, newest first. Answer keys only for admins."""
    q = db.query(Quiz).options(selectinload(Quiz.questions), selectinload(Quiz.category))
    if category_id is not None:
        q = q.filter(Quiz.category_id == category_id)
    include_answers = bool(current_user and current_user.is_admin)
    return [_quiz_to_response(quiz, include_answers) for quiz in q.order_by(Quiz.created_at.desc()).all()]


@router.get("/{quiz_id}", response_model=QuizResponse)
def get_quiz(
    quiz_id: UUID,
    current_user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    quiz = _load_quiz(db, quiz_id)
    return _quiz_to_response(quiz, include_answers=bool(current_user and current_user.is_admin))


@router.post("", response_model=QuizResponse, status_code=status.HTTP_201_CREATED)
def create_quiz(data: QuizCreate, current_user: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Create quiz and its questions in one commit; creator is the calling admin."""
    _ensure_category(db, data.category_id)
    quiz = Quiz(
        title=data.title,
        description=data.description,
        passing_score=data.passing_score,
        total_points=data.total_points,
        time_limit=data.time_limit,
        category_id=data.category_id,
        creator_id=current_user.id,
        questions=_build_questions(data.questions),
    )
    db.add(quiz)
    db.commit()
    logger.info("Quiz created id=%s questions=%s", quiz.id, len(data.questions))
    return _quiz_to_response(_load_quiz(db, quiz.id), include_answers=True)


@router.put("/{quiz_id}", response_model=QuizResponse)
def update_quiz(
    quiz_id: UUID,
    data: QuizUpdate,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Partial update. Sent questions replace the existing ones in the same transaction."""
    quiz = _load_quiz(db, quiz_id)
    fields = data.model_dump(exclude_unset=True, exclude={"questions"})
    if fields.get("category_id") is not None:
        _ensure_category(db, fields["category_id"])
    try:
        for key, value in fields.items():
            if value is None and key in ("category_id", "title", "passing_score", "total_points"):
                continue
            setattr(quiz, key, value)
        if data.questions is not None:
            # delete-orphan removes the old rows in the same commit
            quiz.questions = _build_questions(data.questions)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return _quiz_to_response(_load_quiz(db, quiz_id), include_answers=True)


@router.delete("/{quiz_id}", response_model=MessageResponse)
def delete_quiz(quiz_id: UUID, _: User = Depends(require_admin), db: Session = Depends(get_db)):
    """Delete quiz and its questions. Issued certificates stay, with their quiz reference cleared."""
    quiz = _load_quiz(db, quiz_id)
    db.delete(quiz)
    db.commit()
    logger.info("Quiz deleted id=%s", quiz_id)
    return MessageResponse(message="Quiz removed")


@router.post("/{quiz_id}/submit", response_model=QuizSubmitResponse)
def submit_quiz(
    quiz_id: UUID,
    data: QuizSubmitRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Score answers by position; on pass return the user's certificate code for this quiz."""
    quiz = _load_quiz(db, quiz_id)
    try:
        result = score_answers([q.correct_answer_index for q in quiz.questions], data.answers)
    except EmptyQuizError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    passed = is_passing(result.score, quiz.passing_score)
    certificate_id = None
    if passed:
        certificate_id = issue_certificate(db, current_user.id, quiz, result.score).certificate_code
    logger.info(
        "Quiz submitted quiz_id=%s user_id=%s correct=%s/%s passed=%s",
        quiz_id, current_user.id, result.correct, result.total, passed,
    )
    return QuizSubmitResponse(passed=passed, score=result.score, certificate_id=certificate_id)
