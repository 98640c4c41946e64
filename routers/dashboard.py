# routers/dashboard.py
"""
Dashboard API for signed-in merchants: context, mode switch, settings,
overview and activity.

Everything here is scoped to the merchant's current dashboard mode.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from dependencies import current_merchant, no_store, require_merchant_id, require_same_origin
from models import Merchant, PaymentStatus
from schemas.onboarding import BrandingRequest, ModeRequest, ProfileRequest, WalletRequest
from schemas.payment import PaymentResponse
from schemas.payment_link import PaymentLinkResponse
from services import payment_service
from services.dashboard_service import merchant_overview
from services.money import format_cents
from services.onboarding_service import OnboardingService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"], dependencies=[Depends(no_store)])


def _activity_row(payment) -> dict:
     row = PaymentResponse.model_validate(payment).model_dump(by_alias=True)
     row["amountDisplay"] = format_cents(payment.amount_usd_cents)
     row["linkPublicId"] = payment.link.public_id
     row["linkName"] = payment.link.name
     return row


@router.get("/context", summary="Mode and profile for the dashboard shell")
def dashboard_context(merchant: Merchant = Depends(current_merchant)):
     return {
          "ok": True,
          "mode": merchant.dashboard_mode.value,
          "profile": {
               "name": merchant.public_name,
               "email": merchant.user.email if merchant.user else None,
          },
     }


@router.post("/mode", dependencies=[Depends(require_same_origin)], summary="Switch TEST/LIVE")
def set_mode(
     body: ModeRequest,
     merchant: Merchant = Depends(current_merchant),
     db: Session = Depends(get_session),
):
     merchant.dashboard_mode = body.mode
     db.flush()
     return {"ok": True, "mode": merchant.dashboard_mode.value}


@router.post("/settings/profile", dependencies=[Depends(require_same_origin)])
def update_profile(
     body: ProfileRequest,
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     OnboardingService.save_profile(db, merchant_id, body.publicName, advance_to=None)
     return {"ok": True}


@router.post("/settings/wallet", dependencies=[Depends(require_same_origin)])
def update_wallet(
     body: WalletRequest,
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     merchant = OnboardingService.save_wallet(db, merchant_id, body.settlementWallet, advance_to=None)
     return {"ok": True, "settlementWallet": merchant.settlement_wallet}


@router.post("/settings/branding", dependencies=[Depends(require_same_origin)])
def update_branding(
     body: BrandingRequest,
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     OnboardingService.save_branding(db, merchant_id, body.brandBg, body.brandText, advance_to=None)
     return {"ok": True}


@router.get("/overview", summary="Headline stats and recent activity")
def overview(
     merchant: Merchant = Depends(current_merchant),
     db: Session = Depends(get_session),
):
     stats = merchant_overview(db, merchant.id, merchant.dashboard_mode)
     return {
          "ok": True,
          "env": merchant.dashboard_mode.value,
          "activeLinks": stats["active_links"],
          "totalLinks": stats["total_links"],
          "confirmedPayments": stats["confirmed_payments"],
          "processedCents": stats["processed_cents"],
          "processedDisplay": stats["processed_display"],
          "recentPayments": [_activity_row(p) for p in stats["recent_payments"]],
          "recentLinks": [
               PaymentLinkResponse.model_validate(link).model_dump(by_alias=True)
               for link in stats["recent_links"]
          ],
     }


@router.get("/activity", summary="Payments on this merchant's links")
def activity(
     link: Optional[str] = Query(None, description="Only payments for this link public id"),
     status: Optional[PaymentStatus] = Query(None, description="Filter by payment status"),
     merchant: Merchant = Depends(current_merchant),
     db: Session = Depends(get_session),
):
     link_filter = link.strip() if link and link.strip() else None
     payments = payment_service.list_payments(
          db,
          merchant.id,
          merchant.dashboard_mode,
          link_public_id=link_filter,
          status=status,
     )
     return {
          "ok": True,
          "env": merchant.dashboard_mode.value,
          "link": link_filter,
          "payments": [_activity_row(p) for p in payments],
     }
