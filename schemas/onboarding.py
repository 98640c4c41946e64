# schemas/onboarding.py
"""
Pydantic schemas for onboarding and merchant settings.

Field values are checked again in OnboardingService; these only bound the
request shape.
"""
from typing import Optional

from pydantic import BaseModel, Field

from models import Environment


class ProfileRequest(BaseModel):
     publicName: str = Field(..., max_length=200)


class WalletRequest(BaseModel):
     settlementWallet: str = Field(..., min_length=1, max_length=100)


class BrandingRequest(BaseModel):
     brandBg: str = Field(..., max_length=16)
     brandText: str = Field(..., max_length=16)


class ModeRequest(BaseModel):
     mode: Environment


class OnboardingStateResponse(BaseModel):
     initialStep: int
     completed: bool
     publicName: str
     email: str
     settlementWallet: str
     brandBg: str
     brandText: str
     nextPath: Optional[str] = None
