# services/payment_service.py
"""
Public payment initiation and status.

Payments are created against a link's public id with no merchant
credential. Amounts are integer USD cents; the USDC amount is derived
exactly (1 cent == 10_000 micros).
"""
import logging
from dataclasses import dataclass
from typing import Any, List, Optional
from urllib.parse import quote

from sqlalchemy.orm import Session

from config import MAX_PAYMENT_AMOUNT_CENTS, default_chain_id, usdc_token_address
from models import Environment, LinkMode, Payment, PaymentLink, PaymentStatus
from models.payment import InvalidTransition
from services.errors import ConfigurationError, Conflict, NotFound, ValidationFailure
from services.money import cents_to_micros

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedPayment:
     payment_id: str
     redirect_path: str


def whole_cents(value: Any) -> Optional[int]:
     """
     Positive whole number of cents from a JSON value, or None.

     JSON numbers such as 2550.0 count as whole; 25.5, strings and booleans
     do not.
     """
     # bool is an int subclass; true/false are not amounts
     if isinstance(value, bool):
          return None
     if isinstance(value, float):
          if not value.is_integer():
               return None
          value = int(value)
     if not isinstance(value, int) or value <= 0:
          return None
     return value


def payment_redirect_path(public_id: str, payment_id: str) -> str:
     return f"/pay/{quote(public_id, safe='')}/p/{quote(payment_id, safe='')}"


def create_payment(db: Session, public_id: Optional[str], amount_usd_cents: Any) -> CreatedPayment:
     """
     Start a payment on an active link.

     Raises:
          ValidationFailure: Missing public id, bad amount, amount above the
               ceiling, or a FIXED link paid with any other amount.
          ConfigurationError: The settlement token address is not configured.
          NotFound: No link with this public id.
          Conflict: The link is inactive.
     """
     public_id = (public_id or "").strip() if isinstance(public_id, str) else ""
     if not public_id:
          raise ValidationFailure("Missing payment link.")
     amount_usd_cents = whole_cents(amount_usd_cents)
     if amount_usd_cents is None:
          raise ValidationFailure("Invalid amount.")
     if amount_usd_cents > MAX_PAYMENT_AMOUNT_CENTS:
          raise ValidationFailure("Amount exceeds the maximum allowed.")

     token_address = usdc_token_address()
     if not token_address:
          logger.error("USDC_BASE_TOKEN_ADDRESS is not set; refusing to create payment")
          raise ConfigurationError("Server misconfigured: missing USDC token address.")

     link = db.query(PaymentLink).filter(PaymentLink.public_id == public_id).first()
     if link is None:
          raise NotFound("Payment link not found.")
     if not link.is_active:
          raise Conflict("This payment link is inactive.")

     if link.mode == LinkMode.FIXED:
          expected = link.fixed_amount_cents or 0
          if expected <= 0 or amount_usd_cents != expected:
               raise ValidationFailure("Amount does not match this link's fixed amount.")

     payment = Payment(
          link_id=link.id,
          status=PaymentStatus.CREATED,
          amount_usd_cents=amount_usd_cents,
          amount_usdc_micros=cents_to_micros(amount_usd_cents),
          token_address=token_address,
          chain_id=default_chain_id(),
     )
     db.add(payment)
     db.flush()
     logger.info("Created payment %s on link %s for %d cents", payment.id, link.public_id, amount_usd_cents)
     return CreatedPayment(payment_id=payment.id, redirect_path=payment_redirect_path(link.public_id, payment.id))


def get_payment(db: Session, payment_id: Optional[str]) -> Payment:
     if not payment_id:
          raise ValidationFailure("Missing payment id.")
     payment = db.query(Payment).filter(Payment.id == payment_id).first()
     if payment is None or payment.link is None:
          raise NotFound("Payment not found.")
     return payment


def cancel_payment(db: Session, payment_id: str) -> Payment:
     """
     Payer-initiated cancel of a payment that has not reached a terminal state.

     Raises:
          NotFound: Unknown payment id.
          Conflict: The payment is already CONFIRMED, FAILED or CANCELED.
     """
     payment = get_payment(db, payment_id)
     try:
          payment.mark_as_canceled()
     except InvalidTransition as e:
          raise Conflict(str(e))
     db.flush()
     return payment


def get_merchant_payment(db: Session, merchant_id: str, environment: Environment, payment_id: str) -> Payment:
     """A payment visible to a merchant in one environment; anything else is NotFound."""
     payment = (
          db.query(Payment)
          .join(PaymentLink, Payment.link_id == PaymentLink.id)
          .filter(
               Payment.id == payment_id,
               PaymentLink.merchant_id == merchant_id,
               PaymentLink.environment == environment,
          )
          .first()
     )
     if payment is None:
          raise NotFound()
     return payment


def list_payments(
     db: Session,
     merchant_id: str,
     environment: Environment,
     link_public_id: Optional[str] = None,
     status: Optional[PaymentStatus] = None,
     limit: int = 50,
) -> List[Payment]:
     """Payments on a merchant's links in one environment, newest first."""
     query = (
          db.query(Payment)
          .join(PaymentLink, Payment.link_id == PaymentLink.id)
          .filter(
               PaymentLink.merchant_id == merchant_id,
               PaymentLink.environment == environment,
          )
     )
     if link_public_id:
          query = query.filter(PaymentLink.public_id == link_public_id)
     if status is not None:
          query = query.filter(Payment.status == status)
     return query.order_by(Payment.created_at.desc()).limit(limit).all()
