"""
Shared dependencies: current user from Bearer token, optional user, admin gate.
"""
import logging
from uuid import UUID
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from quizora.database import get_db
from quizora.models.user import User
from quizora.services.auth import decode_access_token

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_from_token(token: str, db: Session) -> User:
    payload = decode_access_token(token)
    if not payload or "sub" not in payload:
        logger.debug("Auth failed: invalid or expired token")
        raise _unauthorized("Not authorized, token failed")
    try:
        user_id = UUID(payload["sub"])
    except (TypeError, ValueError):
        raise _unauthorized("Not authorized, token failed")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise _unauthorized("Not authorized, user not found")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Require valid Bearer token; return User or 401."""
    if not credentials or not (credentials.credentials or "").strip():
        logger.debug("Auth failed: no Bearer token in request")
        raise _unauthorized("Not authorized, no token")
    return _user_from_token(credentials.credentials, db)


def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User | None:
    """User when a valid Bearer token is sent; None otherwise (never 401)."""
    if not credentials or not (credentials.credentials or "").strip():
        return None
    try:
        return _user_from_token(credentials.credentials, db)
    except HTTPException:
        return None


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """403 unless the authenticated user is an admin."""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized as an admin")
    return current_user
