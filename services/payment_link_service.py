# services/payment_link_service.py
"""
Payment Link Service - lifecycle rules for payment links.

A link is FIXED (one exact positive amount) or VARIABLE (payer chooses),
and ACTIVE or INACTIVE. Its environment is taken from the merchant's
dashboard mode at creation, never from the caller.

Every merchant-side lookup is scoped by (merchant_id, public_id,
environment); a link outside that scope is reported exactly like a missing
one.
"""
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from config import MAX_LINK_AMOUNT_CENTS
from models import Merchant, Payment, PaymentLink, LinkMode, Environment
from services.errors import AuthorizationFailure, NotFound, ValidationFailure
from services.identifiers import add_with_unique_retry, generate_unique_public_id
from services.money import parse_decimal_to_cents

logger = logging.getLogger(__name__)


def public_id_exists(db: Session, public_id: str) -> bool:
     return db.query(PaymentLink.id).filter(PaymentLink.public_id == public_id).first() is not None


class PaymentLinkService:
     """Service class for payment-link business logic."""

     @staticmethod
     def create_link(
          db: Session,
          merchant_id: str,
          name: str,
          mode: LinkMode,
          amount_input: Optional[str] = None,
          description: Optional[str] = None,
          is_active: bool = True,
     ) -> PaymentLink:
          """
          Create a payment link in the merchant's current environment.

          Args:
               db: SQLAlchemy database session
               merchant_id: Owner of the link
               name: Display name shown to payers
               mode: FIXED or VARIABLE
               amount_input: Decimal string, required for FIXED, ignored for VARIABLE
               description: Optional free text
               is_active: Initial active flag

          Returns:
               Created PaymentLink object

          Raises:
               NotFound: If the merchant does not exist
               AuthorizationFailure: If no valid settlement wallet is on file
               ValidationFailure: If the name or the fixed amount is invalid
          """
          merchant = db.query(Merchant).filter(Merchant.id == merchant_id).first()
          if merchant is None:
               raise NotFound("Merchant profile not found")

          if not merchant.has_valid_settlement_wallet:
               raise AuthorizationFailure("Set your settlement wallet before creating payment links.")

          clean_name = (name or "").strip()
          if not clean_name:
               raise ValidationFailure("Name is required")

          if mode == LinkMode.FIXED:
               fixed_amount_cents = parse_decimal_to_cents(amount_input or "", MAX_LINK_AMOUNT_CENTS)
          else:
               fixed_amount_cents = None

          environment = merchant.dashboard_mode

          def build() -> PaymentLink:
               return PaymentLink(
                    merchant_id=merchant_id,
                    environment=environment,
                    public_id=generate_unique_public_id(lambda pid: public_id_exists(db, pid)),
                    name=clean_name,
                    description=(description or "").strip() or None,
                    mode=mode,
                    fixed_amount_cents=fixed_amount_cents,
                    is_active=is_active,
               )

          link = add_with_unique_retry(db, build)
          logger.info(
               "Created %s payment link %s for merchant_id=%s in %s",
               mode.value, link.public_id, merchant_id, environment.value
          )
          return link

     @staticmethod
     def set_active(
          db: Session,
          merchant_id: str,
          public_id: str,
          environment: Environment,
          is_active: bool
     ) -> PaymentLink:
          """
          Toggle a link on or off.

          Raises:
               NotFound: If no link matches the (merchant, public id, environment) triple.
          """
          link = PaymentLinkService.get_link(db, merchant_id, public_id, environment)
          link.is_active = is_active
          db.flush()
          return link

     @staticmethod
     def get_link(db: Session, merchant_id: str, public_id: str, environment: Environment) -> PaymentLink:
          link = (
               db.query(PaymentLink)
               .filter(
                    PaymentLink.merchant_id == merchant_id,
                    PaymentLink.public_id == public_id,
                    PaymentLink.environment == environment,
               )
               .first()
          )
          if link is None:
               raise NotFound()
          return link

     @staticmethod
     def list_links(db: Session, merchant_id: str, environment: Environment) -> List[PaymentLink]:
          """Links for one merchant and environment, newest first."""
          return (
               db.query(PaymentLink)
               .filter(
                    PaymentLink.merchant_id == merchant_id,
                    PaymentLink.environment == environment,
               )
               .order_by(PaymentLink.created_at.desc())
               .all()
          )

     @staticmethod
     def get_public_link(db: Session, public_id: str) -> PaymentLink:
          """Unauthenticated lookup for the checkout page."""
          link = db.query(PaymentLink).filter(PaymentLink.public_id == (public_id or "").strip()).first()
          if link is None:
               raise NotFound("Payment link not found.")
          return link

     @staticmethod
     def count_payments(db: Session, link: PaymentLink) -> int:
          return db.query(func.count(Payment.id)).filter(Payment.link_id == link.id).scalar() or 0
