"""
Certificates API: my certificates, detail (owner or admin), PDF download by code (public).
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session, joinedload

from quizora.database import get_db
from quizora.models.certificate import Certificate
from quizora.models.user import User
from quizora.schemas.certificate import CertificateResponse
from quizora.api.deps import get_current_user
from quizora.services.certificate_pdf import CertificateData, build_certificate_pdf
from quizora.services.certificates import get_certificate_by_code

router = APIRouter(prefix="/certificates", tags=["certificates"])
logger = logging.getLogger(__name__)


def _certificate_to_response(cert: Certificate) -> CertificateResponse:
    return CertificateResponse(
        id=cert.id,
        certificate_code=cert.certificate_code,
        user_id=cert.user_id,
        user_name=cert.user.name if cert.user else None,
        quiz_id=cert.quiz_id,
        quiz_title=cert.quiz.title if cert.quiz else None,
        category_id=cert.category_id,
        category_name=cert.category.name if cert.category else None,
        score=cert.score,
        issue_date=cert.issue_date,
    )


def _with_names(db: Session):
    return db.query(Certificate).options(
        joinedload(Certificate.user), joinedload(Certificate.quiz), joinedload(Certificate.category)
    )


@router.get("/my", response_model=list[CertificateResponse])
def my_certificates(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Current user's certificates, newest first."""
    certs = (
        _with_names(db)
        .filter(Certificate.user_id == current_user.id)
        .order_by(Certificate.issue_date.desc())
        .all()
    )
    return [_certificate_to_response(c) for c in certs]


@router.get("/{certificate_id}", response_model=CertificateResponse)
def get_certificate(
    certificate_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    cert = _with_names(db).filter(Certificate.id == certificate_id).first()
    if not cert:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Certificate not found")
    if cert.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to view this certificate")
    return _certificate_to_response(cert)


@router.get("/{certificate_code}/download")
def download_certificate(certificate_code: str, db: Session = Depends(get_db)):
    """Stream the certificate PDF. Anyone holding the code can download it."""
    cert = get_certificate_by_code(db, certificate_code)
    if not cert:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Certificate not found")
    data = CertificateData(
        user_name=cert.user.name if cert.user else "Unknown",
        quiz_title=cert.quiz.title if cert.quiz else "Deleted quiz",
        category_name=cert.category.name if cert.category else "Uncategorized",
        score=cert.score,
        issue_date=cert.issue_date,
        certificate_code=cert.certificate_code,
    )
    buf = build_certificate_pdf(data)
    logger.info("Certificate PDF rendered code=%s", cert.certificate_code)
    return StreamingResponse(
        buf,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=certificate-{cert.certificate_code}.pdf"},
    )
