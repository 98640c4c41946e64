# schemas/auth.py
"""
Pydantic schemas for account registration and login.
"""
from pydantic import BaseModel, Field, ConfigDict


class RegisterRequest(BaseModel):
     name: str = Field(..., min_length=1, max_length=80)
     email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)
     password: str = Field(..., min_length=8, max_length=200)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Acme Studio",
                    "email": "owner@acme.test",
                    "password": "correct horse battery",
               }
          }
     )


class LoginRequest(BaseModel):
     email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)
     password: str = Field(..., min_length=1, max_length=200)
