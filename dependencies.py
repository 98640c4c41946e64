# dependencies.py
"""
Shared FastAPI dependencies: authentication guards, the same-origin check
and response cache headers.

Guards fail closed and raise before any route logic runs.
"""
import logging
from typing import Iterable, Optional

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from config import is_production, session_cookie_name
from database import get_session
from models import ApiKeyType, Merchant
from services.api_key_auth import ApiKeyAuthResult, authenticate_api_key
from services.errors import AuthenticationFailure, AuthorizationFailure, NotFound, ValidationFailure
from services.origin import check_same_origin
from services.session_auth import SessionAuthResult, authenticate_session

logger = logging.getLogger(__name__)


def no_store(response: Response) -> None:
     """Private and mutating responses must never be cached."""
     response.headers["Cache-Control"] = "no-store"


def require_same_origin(request: Request) -> None:
     reason = check_same_origin(
          request.headers.get("origin"),
          request.headers.get("host"),
          enforce=is_production(),
     )
     if reason is not None:
          logger.warning("Rejected cross-origin %s %s: %s", request.method, request.url.path, reason)
          raise AuthorizationFailure("Bad origin")


def require_session(request: Request, db: Session = Depends(get_session)) -> SessionAuthResult:
     result = authenticate_session(db, request.cookies.get(session_cookie_name()))
     if not result.ok:
          raise AuthenticationFailure()
     return result


def require_merchant_id(auth: SessionAuthResult = Depends(require_session)) -> str:
     """Merchant id of the signed-in user; users mid-registration have none."""
     if not auth.merchant_id:
          raise ValidationFailure("Merchant profile not found")
     return auth.merchant_id


def current_merchant(
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
) -> Merchant:
     merchant = db.query(Merchant).filter(Merchant.id == merchant_id).first()
     if merchant is None:
          raise NotFound("Merchant profile not found")
     return merchant


def require_api_key(
     allow_types: Optional[Iterable[ApiKeyType]] = None,
     require_scopes: Optional[Iterable[str]] = None,
):
     """
     Build a dependency that authenticates `Authorization: Bearer <key>`.

     Usage:
          @router.get("/payments/{payment_id}")
          def get_payment(key: ApiKeyAuthResult = Depends(require_api_key(
               allow_types=[ApiKeyType.SECRET], require_scopes=["payments:read"]))):
               ...
     """
     allow = tuple(allow_types or ())
     scopes = tuple(require_scopes or ())

     def dependency(request: Request, db: Session = Depends(get_session)) -> ApiKeyAuthResult:
          result = authenticate_api_key(
               db,
               request.headers.get("authorization"),
               allow_types=allow,
               require_scopes=scopes,
          )
          if not result.ok:
               if result.status_code == 403:
                    raise AuthorizationFailure()
               raise AuthenticationFailure()
          return result

     return dependency
