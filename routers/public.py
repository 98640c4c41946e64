# routers/public.py
"""
Public checkout API. No merchant credential: links are addressed by their
public id and payments by their opaque id.

POST /api/public/payments/create enforces the $10,000,000.00 ceiling and,
for FIXED links, an exact amount match.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from models import LinkMode
from schemas.payment import (
     PaymentCreateRequest,
     PaymentCreateResponse,
     PaymentLinkSummary,
     PaymentMerchantSummary,
     PaymentStatusResponse,
)
from schemas.payment_link import PublicLinkResponse, PublicMerchant
from services import payment_service
from services.money import format_cents
from services.payment_link_service import PaymentLinkService

router = APIRouter(prefix="/api/public", tags=["public"])


@router.get("/links/{public_id}", response_model=PublicLinkResponse, summary="Checkout view of a link")
def get_public_link(public_id: str, db: Session = Depends(get_session)):
     link = PaymentLinkService.get_public_link(db, public_id)
     fixed = link.fixed_amount_cents if link.mode == LinkMode.FIXED else None
     return PublicLinkResponse(
          publicId=link.public_id,
          name=link.name,
          description=link.description,
          mode=link.mode,
          fixedAmountCents=fixed,
          fixedAmountDisplay=format_cents(fixed) if fixed is not None else None,
          isActive=link.is_active,
          merchant=PublicMerchant(
               name=link.merchant.public_name,
               brandBg=link.merchant.brand_bg,
               brandText=link.merchant.brand_text,
          ),
     )


@router.post("/payments/create", response_model=PaymentCreateResponse, summary="Start a payment")
def create_payment(body: PaymentCreateRequest, db: Session = Depends(get_session)):
     created = payment_service.create_payment(db, body.publicId, body.amountUsdCents)
     return PaymentCreateResponse(paymentId=created.payment_id, redirectTo=created.redirect_path)


def _status_payload(payment) -> dict:
     link = payment.link
     return {
          "ok": True,
          "payment": PaymentStatusResponse(
               id=payment.id,
               status=payment.status,
               amountUsdCents=payment.amount_usd_cents,
               amountDisplay=format_cents(payment.amount_usd_cents),
               createdAt=payment.created_at,
               link=PaymentLinkSummary(publicId=link.public_id, name=link.name),
               merchant=PaymentMerchantSummary(
                    name=link.merchant.public_name,
                    brandBg=link.merchant.brand_bg,
                    brandText=link.merchant.brand_text,
               ),
          ),
     }


@router.get("/payments/{payment_id}", summary="Poll payment status")
def get_payment_status(payment_id: str, db: Session = Depends(get_session)):
     return _status_payload(payment_service.get_payment(db, payment_id))


@router.post("/payments/{payment_id}/cancel", summary="Cancel a pending payment")
def cancel_payment(payment_id: str, db: Session = Depends(get_session)):
     return _status_payload(payment_service.cancel_payment(db, payment_id))
