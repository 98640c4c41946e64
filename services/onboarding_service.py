# services/onboarding_service.py
"""
Merchant onboarding: profile -> wallet -> branding -> complete.

The step shown to a returning merchant is derived, not trusted: the two hard
prerequisites (a public name and a settlement wallet) are re-checked every
time, and stored progress only matters once both are satisfied.
"""
import logging
import re
from typing import Optional

from eth_utils import is_address, to_checksum_address
from sqlalchemy.orm import Session

from models import Merchant
from models.base import lock_for_update, utcnow
from services.errors import NotFound, ValidationFailure

logger = logging.getLogger(__name__)

STEP_PROFILE = 0
STEP_WALLET = 1
STEP_BRANDING = 2
STEP_COMPLETE = 3

MIN_PUBLIC_NAME = 2
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


def compute_initial_step(merchant) -> int:
     """
     Step a merchant resumes onboarding at.

     Completed -> 3. Otherwise a missing/short name forces 0 and a missing
     wallet forces 1, whatever was stored; past both gates the stored step is
     clamped into 2..3.
     """
     if merchant.onboarding_completed_at:
          return STEP_COMPLETE
     name = (merchant.public_name or "").strip()
     if len(name) < MIN_PUBLIC_NAME:
          return STEP_PROFILE
     if not merchant.settlement_wallet:
          return STEP_WALLET
     return max(STEP_BRANDING, min(STEP_COMPLETE, merchant.onboarding_step or 0))


def validate_wallet_address(value: str) -> str:
     """
     Checksummed form of an EVM address.

     Raises:
          ValidationFailure: If the address is malformed or the zero address.
     """
     candidate = (value or "").strip()
     if not is_address(candidate):
          raise ValidationFailure("Enter a valid EVM address.")
     checksummed = to_checksum_address(candidate)
     if checksummed.lower() == ZERO_ADDRESS:
          raise ValidationFailure("Zero address can't receive funds.")
     return checksummed


def validate_hex_color(value: str) -> str:
     candidate = (value or "").strip()
     if not HEX_COLOR.fullmatch(candidate):
          raise ValidationFailure("Use a hex color like #0066FF")
     return candidate


def validate_public_name(value: str) -> str:
     candidate = (value or "").strip()
     if len(candidate) < MIN_PUBLIC_NAME:
          raise ValidationFailure("Public name must be at least 2 characters")
     if len(candidate) > 80:
          raise ValidationFailure("Public name must be at most 80 characters")
     return candidate


class OnboardingService:
     """
     Merchant profile updates. Each write locks the merchant row so two
     concurrent requests cannot lose each other's step update.
     """

     @staticmethod
     def get_locked_merchant(db: Session, merchant_id: str) -> Merchant:
          query = db.query(Merchant).filter(Merchant.id == merchant_id)
          merchant = lock_for_update(query, Merchant).first()
          if merchant is None:
               raise NotFound("Merchant profile not found")
          return merchant

     @staticmethod
     def save_profile(db: Session, merchant_id: str, public_name: str, advance_to: Optional[int] = STEP_WALLET) -> Merchant:
          name = validate_public_name(public_name)
          merchant = OnboardingService.get_locked_merchant(db, merchant_id)
          merchant.public_name = name
          if advance_to is not None:
               merchant.advance_onboarding(advance_to)
          db.flush()
          return merchant

     @staticmethod
     def save_wallet(db: Session, merchant_id: str, wallet: str, advance_to: Optional[int] = STEP_BRANDING) -> Merchant:
          checksummed = validate_wallet_address(wallet)
          merchant = OnboardingService.get_locked_merchant(db, merchant_id)
          merchant.settlement_wallet = checksummed
          if advance_to is not None:
               merchant.advance_onboarding(advance_to)
          db.flush()
          logger.info("Settlement wallet set for merchant_id=%s", merchant_id)
          return merchant

     @staticmethod
     def save_branding(
          db: Session,
          merchant_id: str,
          brand_bg: str,
          brand_text: str,
          advance_to: Optional[int] = STEP_COMPLETE
     ) -> Merchant:
          bg = validate_hex_color(brand_bg)
          fg = validate_hex_color(brand_text)
          merchant = OnboardingService.get_locked_merchant(db, merchant_id)
          merchant.brand_bg = bg
          merchant.brand_text = fg
          if advance_to is not None:
               merchant.advance_onboarding(advance_to)
          db.flush()
          return merchant

     @staticmethod
     def complete(db: Session, merchant_id: str) -> Merchant:
          merchant = OnboardingService.get_locked_merchant(db, merchant_id)
          merchant.advance_onboarding(STEP_COMPLETE)
          if merchant.onboarding_completed_at is None:
               merchant.onboarding_completed_at = utcnow()
          db.flush()
          logger.info("Onboarding completed for merchant_id=%s", merchant_id)
          return merchant
