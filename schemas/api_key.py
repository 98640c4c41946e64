# schemas/api_key.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from models import ApiKeyStatus, ApiKeyType, Environment


class ApiKeyCreate(BaseModel):
     environment: Environment
     type: ApiKeyType
     name: Optional[str] = Field(None, min_length=1, max_length=80)
     scopes: List[str] = Field(default_factory=list)


class ApiKeyResponse(BaseModel):
     """Key metadata. Neither the hash nor the plaintext ever appears here."""
     id: str
     environment: Environment
     type: ApiKeyType
     name: Optional[str] = None
     prefix: str
     last4: str
     status: ApiKeyStatus
     scopes: List[str] = Field(default_factory=list)
     created_at: datetime
     revoked_at: Optional[datetime] = None

     model_config = ConfigDict(
          from_attributes=True,
          alias_generator=to_camel,
          populate_by_name=True,
     )
