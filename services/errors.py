# services/errors.py
"""
Domain error taxonomy.

Services raise these; main.py turns them into `{"ok": false, "error": ...}`
responses carrying `status_code`. ConfigurationError is an operator fault:
its detail is logged and the caller only sees a generic message.
"""
from typing import Optional

from fastapi import status


class DomainError(Exception):
     status_code = status.HTTP_400_BAD_REQUEST
     public_message = "Request failed"

     def __init__(self, message: Optional[str] = None):
          super().__init__(message or self.public_message)
          self.message = message or self.public_message

     @property
     def response_message(self) -> str:
          return self.message


class AuthenticationFailure(DomainError):
     """Missing, invalid or expired credential."""
     status_code = status.HTTP_401_UNAUTHORIZED
     public_message = "Unauthorized"


class AuthorizationFailure(DomainError):
     """Valid credential without the required type, scope or origin."""
     status_code = status.HTTP_403_FORBIDDEN
     public_message = "Forbidden"


class ValidationFailure(DomainError):
     status_code = status.HTTP_400_BAD_REQUEST
     public_message = "Invalid input"


class NotFound(DomainError):
     """Absent, or present but owned by someone else; callers cannot tell which."""
     status_code = status.HTTP_404_NOT_FOUND
     public_message = "Not found"


class Conflict(DomainError):
     status_code = status.HTTP_409_CONFLICT
     public_message = "Conflict"


class ConfigurationError(DomainError):
     status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
     public_message = "Something went wrong."

     @property
     def response_message(self) -> str:
          return self.public_message


class IdentifierExhausted(DomainError):
     """Every candidate identifier collided; retrying further is pointless."""
     status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
     public_message = "Something went wrong."

     @property
     def response_message(self) -> str:
          return self.public_message
