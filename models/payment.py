# models/payment.py
"""
Payment model - a payer's attempt against a payment link.

Status moves forward only: CREATED -> SUBMITTED -> CONFIRMED, with FAILED
and CANCELED reachable from any state before CONFIRMED. CONFIRMED, FAILED
and CANCELED are terminal.
"""
import enum

from sqlalchemy import Column, String, Integer, BigInteger, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow


class PaymentStatus(str, enum.Enum):
     CREATED = "CREATED"
     SUBMITTED = "SUBMITTED"
     CONFIRMED = "CONFIRMED"
     FAILED = "FAILED"
     CANCELED = "CANCELED"


TERMINAL_STATUSES = frozenset({
     PaymentStatus.CONFIRMED,
     PaymentStatus.FAILED,
     PaymentStatus.CANCELED,
})

ALLOWED_TRANSITIONS = {
     PaymentStatus.CREATED: frozenset({
          PaymentStatus.SUBMITTED,
          PaymentStatus.FAILED,
          PaymentStatus.CANCELED,
     }),
     PaymentStatus.SUBMITTED: frozenset({
          PaymentStatus.CONFIRMED,
          PaymentStatus.FAILED,
          PaymentStatus.CANCELED,
     }),
}


class InvalidTransition(ValueError):
     """Raised when a payment is moved to a status it cannot reach."""


class Payment(Base):
     __tablename__ = "payments"

     id = Column(String(36), primary_key=True, default=new_id)
     link_id = Column(
          String(36),
          ForeignKey("payment_links.id", ondelete="RESTRICT"),
          nullable=False,
          index=True
     )
     status = Column(
          Enum(PaymentStatus, name="payment_status", create_constraint=True),
          default=PaymentStatus.CREATED,
          nullable=False,
          index=True
     )
     amount_usd_cents = Column(Integer, nullable=False)
     amount_usdc_micros = Column(BigInteger, nullable=False)  # cents * 10_000
     token_address = Column(String(42), nullable=False)
     chain_id = Column(Integer, default=8453, nullable=False)
     created_at = Column(DateTime, default=utcnow, nullable=False)
     updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

     # Relationships
     link = relationship("PaymentLink", back_populates="payments")

     def __repr__(self):
          return f"<Payment(id={self.id}, status='{self.status}', amount_usd_cents={self.amount_usd_cents})>"

     @property
     def is_terminal(self) -> bool:
          return self.status in TERMINAL_STATUSES

     def can_transition_to(self, target: PaymentStatus) -> bool:
          return target in ALLOWED_TRANSITIONS.get(self.status, frozenset())

     def transition_to(self, target: PaymentStatus) -> None:
          """
          Move the payment to `target`.

          Raises:
               InvalidTransition: If the move is not allowed from the current status.
          """
          if not self.can_transition_to(target):
               raise InvalidTransition(
                    f"Payment cannot move from {self.status.value} to {target.value}"
               )
          self.status = target

     def mark_as_submitted(self) -> None:
          self.transition_to(PaymentStatus.SUBMITTED)

     def mark_as_confirmed(self) -> None:
          self.transition_to(PaymentStatus.CONFIRMED)

     def mark_as_failed(self) -> None:
          self.transition_to(PaymentStatus.FAILED)

     def mark_as_canceled(self) -> None:
          self.transition_to(PaymentStatus.CANCELED)
