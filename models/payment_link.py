# models/payment_link.py
import enum

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow
from .merchant import Environment


class LinkMode(str, enum.Enum):
     """Fixed links charge one exact amount; variable links let the payer choose."""
     FIXED = "FIXED"
     VARIABLE = "VARIABLE"


class PaymentLink(Base):
     """
     PaymentLink model - a shareable checkout addressed by a short public id.

     The environment is copied from the merchant's dashboard mode at creation
     and never changes afterwards.
     """
     __tablename__ = "payment_links"
     __table_args__ = (
          Index("ix_payment_links_merchant_env_created", "merchant_id", "environment", "created_at"),
     )

     id = Column(String(36), primary_key=True, default=new_id)
     merchant_id = Column(
          String(36),
          ForeignKey("merchants.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     environment = Column(
          Enum(Environment, name="environment"),
          nullable=False
     )
     public_id = Column(String(32), unique=True, nullable=False, index=True)
     name = Column(String(120), nullable=False)
     description = Column(String(280), nullable=True)
     mode = Column(
          Enum(LinkMode, name="link_mode", create_constraint=True),
          nullable=False
     )
     fixed_amount_cents = Column(Integer, nullable=True)  # set iff mode == FIXED
     is_active = Column(Boolean, default=True, nullable=False)
     created_at = Column(DateTime, default=utcnow, nullable=False)

     # Relationships
     merchant = relationship("Merchant", back_populates="payment_links")
     payments = relationship("Payment", back_populates="link")

     def __repr__(self):
          return f"<PaymentLink(public_id='{self.public_id}', mode='{self.mode}', active={self.is_active})>"
