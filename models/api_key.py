# models/api_key.py
"""
ApiKey model - hashed bearer credentials for the merchant API.

The plaintext key is shown once at creation and never persisted; only its
SHA-256 hash, a non-secret prefix and the last four characters are kept.
"""
import enum
from typing import Optional
from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow
from .merchant import Environment


class ApiKeyType(str, enum.Enum):
     SECRET = "SECRET"
     PUBLISHABLE = "PUBLISHABLE"


class ApiKeyStatus(str, enum.Enum):
     ACTIVE = "ACTIVE"
     REVOKED = "REVOKED"


class ApiKey(Base):
     __tablename__ = "api_keys"

     id = Column(String(36), primary_key=True, default=new_id)
     merchant_id = Column(
          String(36),
          ForeignKey("merchants.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     environment = Column(
          Enum(Environment, name="environment"),
          nullable=False
     )
     type = Column(
          Enum(ApiKeyType, name="api_key_type", create_constraint=True),
          nullable=False
     )
     key_hash = Column(String(64), unique=True, nullable=False, index=True)
     prefix = Column(String(32), nullable=False)  # e.g. byund_sk_live
     last4 = Column(String(4), nullable=False)
     name = Column(String(80), nullable=True)
     status = Column(
          Enum(ApiKeyStatus, name="api_key_status", create_constraint=True),
          default=ApiKeyStatus.ACTIVE,
          nullable=False,
          index=True
     )
     scopes = Column(JSON, default=list, nullable=False)
     created_at = Column(DateTime, default=utcnow, nullable=False)
     revoked_at = Column(DateTime, nullable=True)

     # Relationships
     merchant = relationship("Merchant", back_populates="api_keys")

     def __repr__(self):
          return f"<ApiKey(id={self.id}, prefix='{self.prefix}', last4='{self.last4}', status='{self.status}')>"

     @property
     def is_usable(self) -> bool:
          """Active and never revoked."""
          return self.status == ApiKeyStatus.ACTIVE and self.revoked_at is None

     def revoke(self, when: Optional[datetime] = None) -> None:
          """Permanently revoke the key."""
          self.status = ApiKeyStatus.REVOKED
          self.revoked_at = when or utcnow()
