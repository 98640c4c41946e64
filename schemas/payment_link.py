# schemas/payment_link.py
"""
Pydantic schemas for payment-link API request/response validation.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from models import Environment, LinkMode


class PaymentLinkCreate(BaseModel):
     """Schema for creating a payment link. `amount` is a decimal string such as "25.50"."""
     name: str = Field(..., min_length=1, max_length=120)
     mode: LinkMode
     amount: Optional[str] = Field(None, max_length=64)
     description: Optional[str] = Field(None, max_length=280)
     isActive: Optional[bool] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Design retainer - March",
                    "mode": "FIXED",
                    "amount": "500.00",
                    "description": "Monthly retainer",
               }
          }
     )


class PaymentLinkActiveUpdate(BaseModel):
     isActive: bool
     environment: Environment


class PaymentLinkResponse(BaseModel):
     """Schema for a merchant-visible payment link."""
     id: str
     public_id: str
     name: str
     description: Optional[str] = None
     mode: LinkMode
     fixed_amount_cents: Optional[int] = None
     is_active: bool
     environment: Environment
     created_at: datetime

     model_config = ConfigDict(
          from_attributes=True,
          alias_generator=to_camel,
          populate_by_name=True,
     )


class PublicMerchant(BaseModel):
     name: Optional[str] = None
     brandBg: str
     brandText: str


class PublicLinkResponse(BaseModel):
     """What the checkout page needs; nothing merchant-internal."""
     publicId: str
     name: str
     description: Optional[str] = None
     mode: LinkMode
     currency: str = "USD"
     fixedAmountCents: Optional[int] = None
     fixedAmountDisplay: Optional[str] = None
     isActive: bool
     merchant: PublicMerchant
