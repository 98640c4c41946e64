# models/merchant.py
import enum
import re

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship

from .base import Base, new_id, utcnow

WALLET_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


class Environment(str, enum.Enum):
     """Partition for links, keys and payments. Also the merchant's dashboard mode."""
     TEST = "TEST"
     LIVE = "LIVE"


class Merchant(Base):
     """
     Merchant model - public profile, settlement wallet, branding and
     onboarding progress for a user.
     """
     __tablename__ = "merchants"

     id = Column(String(36), primary_key=True, default=new_id)
     user_id = Column(
          String(36),
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          unique=True
     )

     public_name = Column(String(80), nullable=True)
     settlement_wallet = Column(String(42), nullable=True)  # checksummed 0x address
     dashboard_mode = Column(
          Enum(Environment, name="environment", create_constraint=True),
          default=Environment.TEST,
          nullable=False
     )

     # Branding
     brand_bg = Column(String(7), default="#0066FF", nullable=False)
     brand_text = Column(String(7), default="#FFFFFF", nullable=False)

     # Onboarding: 0 profile, 1 wallet, 2 branding, 3 complete
     onboarding_step = Column(Integer, default=0, nullable=False)
     onboarding_completed_at = Column(DateTime, nullable=True)

     # Timestamps
     created_at = Column(DateTime, default=utcnow, nullable=False)
     updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

     # Relationships
     user = relationship("User", back_populates="merchant")
     payment_links = relationship("PaymentLink", back_populates="merchant", cascade="all, delete-orphan")
     api_keys = relationship("ApiKey", back_populates="merchant", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Merchant(id={self.id}, public_name='{self.public_name}', mode='{self.dashboard_mode}')>"

     @property
     def has_valid_settlement_wallet(self) -> bool:
          """True when a 0x-prefixed 20-byte hex address is on file."""
          if not isinstance(self.settlement_wallet, str):
               return False
          return bool(WALLET_PATTERN.match(self.settlement_wallet.strip()))

     def advance_onboarding(self, step: int) -> None:
          """Move onboarding forward to `step`; never moves it back."""
          self.onboarding_step = max(self.onboarding_step or 0, step)
