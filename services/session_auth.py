# services/session_auth.py
"""
Cookie session authentication.

The cookie holds a 256-bit random token; the sessions table holds only its
SHA-256 hash. A session is valid while `expires_at` is in the future.
Lifetime is fixed at creation (no sliding renewal).

Login rotates: every existing session of the user is deleted before the new
one is created, so a user has at most one live session.
"""
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from config import is_production, session_cookie_name, session_days
from models import AuthSession, Merchant, User
from models.base import lock_for_update, utcnow
from services.tokens import generate_token, hash_token

logger = logging.getLogger(__name__)


class SessionFailureReason(str, enum.Enum):
     MISSING = "MISSING"
     EXPIRED = "EXPIRED"
     NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class SessionAuthResult:
     ok: bool
     user_id: Optional[str] = None
     merchant_id: Optional[str] = None
     reason: Optional[SessionFailureReason] = None

     @classmethod
     def success(cls, user_id: str, merchant_id: Optional[str]) -> "SessionAuthResult":
          return cls(ok=True, user_id=user_id, merchant_id=merchant_id)

     @classmethod
     def failure(cls, reason: SessionFailureReason) -> "SessionAuthResult":
          return cls(ok=False, reason=reason)


@dataclass(frozen=True)
class IssuedSession:
     """Plaintext token for the cookie plus its expiry. Never persisted as-is."""
     token: str
     expires_at: datetime


def session_expiry(now: Optional[datetime] = None) -> datetime:
     return (now or utcnow()) + timedelta(days=session_days())


def authenticate_session(
     db: Session,
     cookie_value: Optional[str],
     now: Optional[datetime] = None
) -> SessionAuthResult:
     """
     Resolve a session cookie to a user (and merchant, when one exists).

     Expired sessions fail closed but are left in place; login and logout
     are what evict them.
     """
     if not cookie_value:
          return SessionAuthResult.failure(SessionFailureReason.MISSING)

     record = (
          db.query(AuthSession)
          .filter(AuthSession.token_hash == hash_token(cookie_value))
          .first()
     )
     if record is None:
          logger.debug("Session lookup failed: NOT_FOUND")
          return SessionAuthResult.failure(SessionFailureReason.NOT_FOUND)

     if record.is_expired(now):
          logger.debug("Session lookup failed: EXPIRED (user_id=%s)", record.user_id)
          return SessionAuthResult.failure(SessionFailureReason.EXPIRED)

     merchant = db.query(Merchant.id).filter(Merchant.user_id == record.user_id).first()
     merchant_id = merchant[0] if merchant else None
     return SessionAuthResult.success(record.user_id, merchant_id)


def create_session(db: Session, user_id: str, now: Optional[datetime] = None) -> IssuedSession:
     """Persist a new session for `user_id` and return its plaintext token."""
     token = generate_token()
     expires_at = session_expiry(now)
     db.add(AuthSession(token_hash=hash_token(token), user_id=user_id, expires_at=expires_at))
     db.flush()
     return IssuedSession(token=token, expires_at=expires_at)


def user_lock_query(db: Session, user_id: str):
     """Locks the user row so concurrent logins for one user run one after another."""
     return lock_for_update(db.query(User.id).filter(User.id == user_id), User)


def rotate_session(db: Session, user_id: str, now: Optional[datetime] = None) -> IssuedSession:
     """
     Delete every session of `user_id`, then create a single new one.

     The user row is locked first; a second login for the same user waits,
     then deletes the session this one created, so one session survives.
     """
     user_lock_query(db, user_id).first()
     removed = (
          db.query(AuthSession)
          .filter(AuthSession.user_id == user_id)
          .delete(synchronize_session=False)
     )
     if removed:
          logger.info("Rotated %d existing session(s) for user_id=%s", removed, user_id)
     return create_session(db, user_id, now)


def end_session(db: Session, cookie_value: Optional[str]) -> int:
     """Delete the session behind `cookie_value`. Returns the number removed."""
     if not cookie_value:
          return 0
     return (
          db.query(AuthSession)
          .filter(AuthSession.token_hash == hash_token(cookie_value))
          .delete(synchronize_session=False)
     )


def cookie_options(expires_at: datetime) -> dict:
     """
     Attributes for the session cookie, in `Response.set_cookie` keywords.

     `secure` is only set in production so local HTTP development works;
     the host-locked `__Host-` cookie name requires it there.
     """
     return {
          "httponly": True,
          "secure": is_production(),
          "samesite": "lax",
          "path": "/",
          "expires": expires_at.replace(tzinfo=timezone.utc),
     }


def set_session_cookie(response, issued: IssuedSession) -> None:
     response.set_cookie(session_cookie_name(), issued.token, **cookie_options(issued.expires_at))


def clear_session_cookie(response) -> None:
     """Expire the cookie using the same attribute shape it was set with."""
     response.delete_cookie(
          session_cookie_name(),
          path="/",
          secure=is_production(),
          httponly=True,
          samesite="lax",
     )
