# routers/payment_links.py
"""
Payment link API for signed-in merchants.

Links are always created in, and listed from, the merchant's current
dashboard mode. Toggling is scoped by merchant, public id and environment;
a link outside that scope answers 404 like a missing one.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import current_merchant, no_store, require_same_origin
from models import Merchant
from schemas.payment_link import PaymentLinkActiveUpdate, PaymentLinkCreate, PaymentLinkResponse
from services.payment_link_service import PaymentLinkService

router = APIRouter(prefix="/api/payment-links", tags=["payment-links"], dependencies=[Depends(no_store)])


@router.get("", summary="List payment links in the current environment")
def list_links(
     merchant: Merchant = Depends(current_merchant),
     db: Session = Depends(get_session),
):
     links = PaymentLinkService.list_links(db, merchant.id, merchant.dashboard_mode)
     return {
          "ok": True,
          "env": merchant.dashboard_mode.value,
          "links": [PaymentLinkResponse.model_validate(link) for link in links],
     }


@router.post(
     "",
     status_code=status.HTTP_200_OK,
     dependencies=[Depends(require_same_origin)],
     summary="Create a payment link"
)
def create_link(
     body: PaymentLinkCreate,
     merchant: Merchant = Depends(current_merchant),
     db: Session = Depends(get_session),
):
     """
     Create a FIXED or VARIABLE payment link.

     - **amount**: decimal string, required for FIXED (max $2,000,000.00), ignored for VARIABLE
     - Requires a settlement wallet on file (**403** otherwise)
     """
     link = PaymentLinkService.create_link(
          db,
          merchant.id,
          name=body.name,
          mode=body.mode,
          amount_input=body.amount,
          description=body.description,
          is_active=True if body.isActive is None else body.isActive,
     )
     return {"ok": True, "link": PaymentLinkResponse.model_validate(link)}


@router.get("/{public_id}", summary="Get one payment link")
def get_link(
     public_id: str,
     merchant: Merchant = Depends(current_merchant),
     db: Session = Depends(get_session),
):
     link = PaymentLinkService.get_link(db, merchant.id, public_id, merchant.dashboard_mode)
     return {
          "ok": True,
          "link": PaymentLinkResponse.model_validate(link),
          "paymentCount": PaymentLinkService.count_payments(db, link),
     }


@router.post("/{public_id}/active", dependencies=[Depends(require_same_origin)], summary="Activate or deactivate")
def set_active(
     public_id: str,
     body: PaymentLinkActiveUpdate,
     merchant: Merchant = Depends(current_merchant),
     db: Session = Depends(get_session),
):
     link = PaymentLinkService.set_active(db, merchant.id, public_id, body.environment, body.isActive)
     return {"ok": True, "isActive": link.is_active}
