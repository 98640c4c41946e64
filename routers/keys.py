# routers/keys.py
"""
API v2: key management for signed-in merchants, and the read endpoints
that authenticate with `Authorization: Bearer <api key>`.

Key plaintext is returned once, from the create call, and never again.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from dependencies import no_store, require_api_key, require_merchant_id, require_same_origin
from models import ApiKeyType, Environment
from schemas.api_key import ApiKeyCreate, ApiKeyResponse
from schemas.payment import PaymentResponse
from schemas.payment_link import PaymentLinkResponse
from services import payment_service
from services.api_key_auth import ApiKeyAuthResult
from services.api_key_service import ApiKeyService
from services.payment_link_service import PaymentLinkService

router = APIRouter(prefix="/api/v2", tags=["api-v2"], dependencies=[Depends(no_store)])

read_links_key = require_api_key(allow_types=[ApiKeyType.SECRET], require_scopes=["payment_links:read"])
read_payments_key = require_api_key(allow_types=[ApiKeyType.SECRET], require_scopes=["payments:read"])


# ========== Key management (session auth) ==========

@router.get("/keys", summary="List API keys")
def list_keys(
     environment: Optional[Environment] = Query(None),
     type: Optional[ApiKeyType] = Query(None),
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     keys = ApiKeyService.list_keys(db, merchant_id, environment=environment, key_type=type)
     return {"ok": True, "keys": [ApiKeyResponse.model_validate(k) for k in keys]}


@router.post("/keys", dependencies=[Depends(require_same_origin)], summary="Create an API key")
def create_key(
     body: ApiKeyCreate,
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     """
     Issue a new key. The response's `key` is the only time the plaintext
     is ever shown; store it immediately.
     """
     issued = ApiKeyService.issue_key(
          db,
          merchant_id,
          environment=body.environment,
          key_type=body.type,
          name=body.name,
          scopes=body.scopes,
     )
     return {
          "ok": True,
          "key": issued.plaintext,
          "apiKey": ApiKeyResponse.model_validate(issued.record),
     }


@router.post("/keys/{key_id}/revoke", dependencies=[Depends(require_same_origin)], summary="Revoke an API key")
def revoke_key(
     key_id: str,
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     record = ApiKeyService.revoke_key(db, merchant_id, key_id)
     return {"ok": True, "apiKey": ApiKeyResponse.model_validate(record)}


# ========== Bearer endpoints ==========

@router.get("/payment-links", summary="List payment links for the key's environment")
def api_list_payment_links(
     key: ApiKeyAuthResult = Depends(read_links_key),
     db: Session = Depends(get_session),
):
     links = PaymentLinkService.list_links(db, key.merchant_id, key.environment)
     return {
          "ok": True,
          "env": key.environment.value,
          "links": [PaymentLinkResponse.model_validate(link) for link in links],
     }


@router.get("/payments/{payment_id}", summary="Get a payment by id")
def api_get_payment(
     payment_id: str,
     key: ApiKeyAuthResult = Depends(read_payments_key),
     db: Session = Depends(get_session),
):
     payment = payment_service.get_merchant_payment(db, key.merchant_id, key.environment, payment_id)
     return {"ok": True, "payment": PaymentResponse.model_validate(payment)}
