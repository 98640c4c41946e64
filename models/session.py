# models/session.py
"""
AuthSession model - server-side record behind the session cookie.

Only the SHA-256 hash of the cookie token is stored; the plaintext lives
in the browser alone.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow


class AuthSession(Base):
     __tablename__ = "sessions"

     id = Column(String(36), primary_key=True, default=new_id)
     token_hash = Column(String(64), unique=True, nullable=False, index=True)  # SHA-256 hex length
     user_id = Column(
          String(36),
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     expires_at = Column(DateTime, nullable=False)
     created_at = Column(DateTime, default=utcnow, nullable=False)

     # Relationships
     user = relationship("User", back_populates="sessions")

     def __repr__(self):
          return f"<AuthSession(id={self.id}, user_id={self.user_id}, expires_at={self.expires_at})>"

     def is_expired(self, now: Optional[datetime] = None) -> bool:
          """A session whose expiry is now or earlier is no longer valid."""
          return self.expires_at <= (now or utcnow())
