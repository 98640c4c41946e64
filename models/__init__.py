# models/__init__.py
from .base import Base
from .user import User
from .session import AuthSession
from .merchant import Merchant, Environment
from .api_key import ApiKey, ApiKeyType, ApiKeyStatus
from .payment_link import PaymentLink, LinkMode
from .payment import Payment, PaymentStatus

__all__ = [
     "Base",
     "User",
     "AuthSession",
     "Merchant",
     "Environment",
     "ApiKey",
     "ApiKeyType",
     "ApiKeyStatus",
     "PaymentLink",
     "LinkMode",
     "Payment",
     "PaymentStatus",
]
