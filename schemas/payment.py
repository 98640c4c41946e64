# schemas/payment.py
"""
Pydantic schemas for public payment initiation and status polling.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from models import PaymentStatus


class PaymentCreateRequest(BaseModel):
     """
     Request body for POST /api/public/payments/create.

     `amountUsdCents` is left untyped here so PaymentService can answer
     non-integers with its own "Invalid amount." message.
     """
     publicId: Optional[str] = None
     amountUsdCents: Any = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "publicId": "a8Kq02LmZx9T",
                    "amountUsdCents": 50000,
               }
          }
     )


class PaymentCreateResponse(BaseModel):
     ok: bool = True
     paymentId: str
     redirectTo: str


class PaymentResponse(BaseModel):
     """A payment as seen by the merchant."""
     id: str
     status: PaymentStatus
     amount_usd_cents: int
     amount_usdc_micros: int = Field(..., description="amount_usd_cents * 10_000")
     token_address: str
     chain_id: int
     created_at: datetime

     model_config = ConfigDict(
          from_attributes=True,
          alias_generator=to_camel,
          populate_by_name=True,
     )


class PaymentLinkSummary(BaseModel):
     publicId: str
     name: str


class PaymentMerchantSummary(BaseModel):
     name: Optional[str] = None
     brandBg: str
     brandText: str


class PaymentStatusResponse(BaseModel):
     """Status polling payload for the payer."""
     id: str
     status: PaymentStatus
     amountUsdCents: int
     amountDisplay: str
     createdAt: datetime
     link: PaymentLinkSummary
     merchant: PaymentMerchantSummary
