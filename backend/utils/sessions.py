# utils/sessions.py
import secrets
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session as DbSession

from config import settings
from database import get_db
from models.users import User, Session

# Missing headers are reported as 401 by get_current_user, not 403 by the scheme
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# Issue a new opaque session token for the user
def create_session(db: DbSession, user: User, ttl: Optional[timedelta] = None) -> Session:
    session = Session(
        user_id=user.id,
        token=secrets.token_hex(32),
        expires_at=datetime.utcnow() + (ttl or timedelta(hours=settings.SESSION_TTL_HOURS)),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


# Delete the session row for a token; unknown tokens are ignored
def revoke_session(db: DbSession, token: Optional[str]) -> None:
    if not token:
        return
    db.query(Session).filter(Session.token == token).delete(synchronize_session=False)
    db.commit()


def revoke_user_sessions(db: DbSession, user_id: int) -> int:
    count = db.query(Session).filter(Session.user_id == user_id).delete(synchronize_session=False)
    db.commit()
    return count


def cleanup_expired_sessions(db: DbSession) -> int:
    count = db.query(Session).filter(Session.expires_at <= datetime.utcnow()).delete(synchronize_session=False)
    db.commit()
    return count


def resolve_session(db: DbSession, token: Optional[str]) -> User:
    """Return the active user owning a non-expired session, or raise 401."""
    if not token:
        raise _unauthorized("No token provided")

    session = (
        db.query(Session)
        .filter(Session.token == token, Session.expires_at > datetime.utcnow())
        .first()
    )
    if session is None:
        raise _unauthorized("Invalid or expired token")

    user = db.query(User).filter(User.id == session.user_id).first()
    if user is None or not user.is_active:
        raise _unauthorized("Invalid or expired token")
    return user


def bearer_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> Optional[str]:
    return credentials.credentials if credentials else None


# Retrieve the currently authenticated user from the bearer token
def get_current_user(
    token: Optional[str] = Depends(bearer_token),
    db: DbSession = Depends(get_db),
) -> User:
    return resolve_session(db, token)


# Dependency factory for Role-Based Access Control
def role_required(*allowed_roles):
    def _checker(current_user: User = Depends(get_current_user)):
        if allowed_roles and current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin access required" if allowed_roles == ("admin",) else "Forbidden",
            )
        return current_user
    return _checker


require_admin = role_required("admin")
