"""
Certificate issuance: at most one certificate per (user, quiz).
Repeat passes return the existing certificate. Concurrent first passes are settled by the
(user_id, quiz_id) unique constraint: the loser rolls back and returns the winner's row.
"""
import logging
import secrets
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from quizora.models.certificate import Certificate
from quizora.models.quiz import Quiz

logger = logging.getLogger(__name__)

CERTIFICATE_CODE_PREFIX = "CERT"
# A collision on the 32-bit random part is unlikely; retry a few times anyway
MAX_CODE_ATTEMPTS = 5


def generate_certificate_code(now: datetime | None = None) -> str:
    """CERT-<year>-<8 upper-case hex chars>, e.g. CERT-2026-1A2B3C4D."""
    year = (now or datetime.now(timezone.utc)).year
    return f"{CERTIFICATE_CODE_PREFIX}-{year}-{secrets.token_hex(4).upper()}"


def find_certificate(db: Session, user_id: UUID, quiz_id: UUID) -> Certificate | None:
    return (
        db.query(Certificate)
        .filter(Certificate.user_id == user_id, Certificate.quiz_id == quiz_id)
        .first()
    )


def get_certificate_by_code(db: Session, code: str) -> Certificate | None:
    """Certificate with user, quiz and category loaded (for rendering)."""
    return (
        db.query(Certificate)
        .options(joinedload(Certificate.user), joinedload(Certificate.quiz), joinedload(Certificate.category))
        .filter(Certificate.certificate_code == code)
        .first()
    )


def issue_certificate(db: Session, user_id: UUID, quiz: Quiz, score: float) -> Certificate:
    """Return the user's certificate for this quiz, creating it on first pass."""
    existing = find_certificate(db, user_id, quiz.id)
    if existing:
        logger.info("Certificate reused: code=%s user_id=%s quiz_id=%s", existing.certificate_code, user_id, quiz.id)
        return existing
    for attempt in range(1, MAX_CODE_ATTEMPTS + 1):
        cert = Certificate(
            user_id=user_id,
            category_id=quiz.category_id,
            quiz_id=quiz.id,
            score=score,
            certificate_code=generate_certificate_code(),
        )
        db.add(cert)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            existing = find_certificate(db, user_id, quiz.id)
            if existing:
                logger.info("Certificate issued concurrently; reusing code=%s", existing.certificate_code)
                return existing
            logger.warning("Certificate code collision (attempt %s/%s): %s", attempt, MAX_CODE_ATTEMPTS, e)
            continue
        db.refresh(cert)
        logger.info("Certificate issued: code=%s user_id=%s quiz_id=%s score=%.2f", cert.certificate_code, user_id, quiz.id, score)
        return cert
    raise RuntimeError(f"Could not allocate a unique certificate code after {MAX_CODE_ATTEMPTS} attempts")
