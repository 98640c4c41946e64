# services/api_key_service.py
"""
API key issuance, listing and revocation.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from models import ApiKey, ApiKeyStatus, ApiKeyType, Environment
from models.base import lock_for_update
from services.errors import NotFound, ValidationFailure
from services.identifiers import add_with_unique_retry, new_api_key_secret
from services.tokens import hash_token

logger = logging.getLogger(__name__)

KNOWN_SCOPES = frozenset({"payment_links:read", "payments:read"})


@dataclass(frozen=True)
class IssuedApiKey:
     """The stored record plus the plaintext, which is shown exactly once."""
     record: ApiKey
     plaintext: str


class ApiKeyService:
     """Service class for merchant API keys."""

     @staticmethod
     def issue_key(
          db: Session,
          merchant_id: str,
          environment: Environment,
          key_type: ApiKeyType,
          name: Optional[str] = None,
          scopes: Optional[Iterable[str]] = None,
     ) -> IssuedApiKey:
          """
          Create a key and return its plaintext alongside the record.

          Raises:
               ValidationFailure: If a requested scope is unknown.
               IdentifierExhausted: If the key hash kept colliding.
          """
          requested = sorted(set(scopes or ()))
          unknown = [s for s in requested if s not in KNOWN_SCOPES]
          if unknown:
               raise ValidationFailure(f"Unknown scope: {unknown[0]}")

          plaintexts = []

          def build() -> ApiKey:
               secret = new_api_key_secret(key_type, environment)
               plaintexts.append(secret.plaintext)
               return ApiKey(
                    merchant_id=merchant_id,
                    environment=environment,
                    type=key_type,
                    name=(name or "").strip() or None,
                    key_hash=hash_token(secret.plaintext),
                    prefix=secret.prefix,
                    last4=secret.last4,
                    status=ApiKeyStatus.ACTIVE,
                    scopes=requested,
               )

          record = add_with_unique_retry(db, build)
          logger.info("Issued %s API key %s (%s) for merchant_id=%s", key_type.value, record.id, record.prefix, merchant_id)
          return IssuedApiKey(record=record, plaintext=plaintexts[-1])

     @staticmethod
     def list_keys(
          db: Session,
          merchant_id: str,
          environment: Optional[Environment] = None,
          key_type: Optional[ApiKeyType] = None,
     ) -> List[ApiKey]:
          query = db.query(ApiKey).filter(ApiKey.merchant_id == merchant_id)
          if environment is not None:
               query = query.filter(ApiKey.environment == environment)
          if key_type is not None:
               query = query.filter(ApiKey.type == key_type)
          return query.order_by(ApiKey.created_at.desc()).all()

     @staticmethod
     def revoke_key(db: Session, merchant_id: str, key_id: str) -> ApiKey:
          """
          Revoke an ACTIVE key owned by `merchant_id`.

          Raises:
               NotFound: If no such active key exists for this merchant.
          """
          query = db.query(ApiKey).filter(
               ApiKey.id == key_id,
               ApiKey.merchant_id == merchant_id,
               ApiKey.status == ApiKeyStatus.ACTIVE,
          )
          record = lock_for_update(query, ApiKey).first()
          if record is None:
               raise NotFound()
          record.revoke()
          db.flush()
          logger.info("Revoked API key %s for merchant_id=%s", key_id, merchant_id)
          return record
