# schemas/__init__.py
from .auth import RegisterRequest, LoginRequest
from .payment_link import (
     PaymentLinkCreate,
     PaymentLinkActiveUpdate,
     PaymentLinkResponse,
     PublicLinkResponse,
)
from .payment import PaymentCreateRequest, PaymentResponse, PaymentStatusResponse
from .api_key import ApiKeyCreate, ApiKeyResponse

__all__ = [
     "RegisterRequest",
     "LoginRequest",
     "PaymentLinkCreate",
     "PaymentLinkActiveUpdate",
     "PaymentLinkResponse",
     "PublicLinkResponse",
     "PaymentCreateRequest",
     "PaymentResponse",
     "PaymentStatusResponse",
     "ApiKeyCreate",
     "ApiKeyResponse",
]
