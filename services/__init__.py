# services/__init__.py
from .api_key_service import ApiKeyService
from .onboarding_service import OnboardingService, compute_initial_step
from .payment_link_service import PaymentLinkService
from .money import parse_decimal_to_cents, cents_to_micros, format_cents
from .tokens import generate_token, hash_token

__all__ = [
     "ApiKeyService",
     "OnboardingService",
     "compute_initial_step",
     "PaymentLinkService",
     "parse_decimal_to_cents",
     "cents_to_micros",
     "format_cents",
     "generate_token",
     "hash_token",
]
