# services/api_key_auth.py
"""
Bearer API-key authentication.

`Authorization: Bearer <plaintext>` is hashed and looked up by key_hash.
Unknown, malformed, inactive and revoked keys are authentication failures
(401); a usable key lacking an allowed type or a required scope is an
authorization failure (403). Keys have no TTL; only revocation ends them.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from fastapi import status
from sqlalchemy.orm import Session

from models import ApiKey, ApiKeyType, Environment
from services.tokens import hash_token

logger = logging.getLogger(__name__)


class ApiKeyFailureReason(str, enum.Enum):
     MISSING_OR_MALFORMED = "MISSING_OR_MALFORMED"
     NOT_FOUND = "NOT_FOUND"
     REVOKED_OR_INACTIVE = "REVOKED_OR_INACTIVE"
     TYPE_FORBIDDEN = "TYPE_FORBIDDEN"
     SCOPE_FORBIDDEN = "SCOPE_FORBIDDEN"


FORBIDDEN_REASONS = frozenset({
     ApiKeyFailureReason.TYPE_FORBIDDEN,
     ApiKeyFailureReason.SCOPE_FORBIDDEN,
})


@dataclass(frozen=True)
class ApiKeyAuthResult:
     ok: bool
     api_key_id: Optional[str] = None
     merchant_id: Optional[str] = None
     environment: Optional[Environment] = None
     key_type: Optional[ApiKeyType] = None
     scopes: List[str] = field(default_factory=list)
     reason: Optional[ApiKeyFailureReason] = None

     @classmethod
     def failure(cls, reason: ApiKeyFailureReason) -> "ApiKeyAuthResult":
          return cls(ok=False, reason=reason)

     @property
     def status_code(self) -> int:
          if self.ok:
               return status.HTTP_200_OK
          if self.reason in FORBIDDEN_REASONS:
               return status.HTTP_403_FORBIDDEN
          return status.HTTP_401_UNAUTHORIZED


def parse_bearer(header_value: Optional[str]) -> Optional[str]:
     """Token from `Bearer <token>`; None for a missing or wrong scheme or empty token."""
     scheme, _, rest = (header_value or "").partition(" ")
     if not scheme or scheme.lower() != "bearer":
          return None
     token = rest.strip()
     return token or None


def authenticate_api_key(
     db: Session,
     authorization: Optional[str],
     allow_types: Optional[Iterable[ApiKeyType]] = None,
     require_scopes: Optional[Iterable[str]] = None,
) -> ApiKeyAuthResult:
     token = parse_bearer(authorization)
     if token is None:
          return ApiKeyAuthResult.failure(ApiKeyFailureReason.MISSING_OR_MALFORMED)

     record = db.query(ApiKey).filter(ApiKey.key_hash == hash_token(token)).first()
     if record is None:
          return ApiKeyAuthResult.failure(ApiKeyFailureReason.NOT_FOUND)

     if not record.is_usable:
          logger.debug("API key %s rejected: revoked or inactive", record.id)
          return ApiKeyAuthResult.failure(ApiKeyFailureReason.REVOKED_OR_INACTIVE)

     allowed = set(allow_types or ())
     if allowed and record.type not in allowed:
          return ApiKeyAuthResult.failure(ApiKeyFailureReason.TYPE_FORBIDDEN)

     have = set(record.scopes or [])
     missing = [s for s in (require_scopes or ()) if s not in have]
     if missing:
          logger.debug("API key %s missing scopes %s", record.id, missing)
          return ApiKeyAuthResult.failure(ApiKeyFailureReason.SCOPE_FORBIDDEN)

     return ApiKeyAuthResult(
          ok=True,
          api_key_id=record.id,
          merchant_id=record.merchant_id,
          environment=record.environment,
          key_type=record.type,
          scopes=list(record.scopes or []),
     )
