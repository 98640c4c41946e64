# routers/onboarding.py
"""
Onboarding API: profile -> wallet -> branding -> complete.

Each step only moves `onboarding_step` forward.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from dependencies import current_merchant, no_store, require_merchant_id, require_same_origin
from models import Merchant
from schemas.onboarding import BrandingRequest, OnboardingStateResponse, ProfileRequest, WalletRequest
from services.onboarding_service import OnboardingService, compute_initial_step
from services.origin import safe_next_path

router = APIRouter(prefix="/api/onboarding", tags=["onboarding"], dependencies=[Depends(no_store)])


@router.get("/state", response_model=OnboardingStateResponse, summary="Where to resume onboarding")
def onboarding_state(
     next: Optional[str] = Query(None, description="Where to go once onboarding is done"),
     merchant: Merchant = Depends(current_merchant),
):
     return OnboardingStateResponse(
          initialStep=compute_initial_step(merchant),
          completed=merchant.onboarding_completed_at is not None,
          publicName=merchant.public_name or "",
          email=merchant.user.email if merchant.user else "",
          settlementWallet=merchant.settlement_wallet or "",
          brandBg=merchant.brand_bg,
          brandText=merchant.brand_text,
          nextPath=safe_next_path(next),
     )


@router.post("/profile", dependencies=[Depends(require_same_origin)])
def save_profile(
     body: ProfileRequest,
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     OnboardingService.save_profile(db, merchant_id, body.publicName)
     return {"ok": True}


@router.post("/wallet", dependencies=[Depends(require_same_origin)])
def save_wallet(
     body: WalletRequest,
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     merchant = OnboardingService.save_wallet(db, merchant_id, body.settlementWallet)
     return {"ok": True, "settlementWallet": merchant.settlement_wallet}


@router.post("/branding", dependencies=[Depends(require_same_origin)])
def save_branding(
     body: BrandingRequest,
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     OnboardingService.save_branding(db, merchant_id, body.brandBg, body.brandText)
     return {"ok": True}


@router.post("/complete", dependencies=[Depends(require_same_origin)])
def complete(
     merchant_id: str = Depends(require_merchant_id),
     db: Session = Depends(get_session),
):
     OnboardingService.complete(db, merchant_id)
     return {"ok": True}
