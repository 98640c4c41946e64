# services/identifiers.py
"""
Random identifiers.

Public ids are short base62 strings drawn from 9 random bytes. Uniqueness
is probabilistic, so callers check storage and retry a bounded number of
times; the unique index on the column stays the final arbiter.
"""
import base64
import logging
import secrets
from dataclasses import dataclass
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.api_key import ApiKeyType
from models.merchant import Environment
from services.errors import IdentifierExhausted

logger = logging.getLogger(__name__)

T = TypeVar("T")

BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
PUBLIC_ID_BYTES = 9
PUBLIC_ID_LENGTH = 12
MAX_ID_ATTEMPTS = 3

API_KEY_PRODUCT = "byund"
API_KEY_RANDOM_BYTES = 32


def base62_encode(data: bytes) -> str:
     num = int.from_bytes(data, "big")
     if num == 0:
          return BASE62_ALPHABET[0]
     out = []
     while num > 0:
          num, rem = divmod(num, 62)
          out.append(BASE62_ALPHABET[rem])
     return "".join(reversed(out))


def new_public_id(length: int = PUBLIC_ID_LENGTH) -> str:
     """
     Random base62 id of exactly `length` characters.

     9 random bytes encode to at most 13 base62 digits; short encodings are
     left-padded with '0' and long ones truncated.
     """
     encoded = base62_encode(secrets.token_bytes(PUBLIC_ID_BYTES))
     return encoded.rjust(length, BASE62_ALPHABET[0])[:length]


def generate_unique_public_id(
     exists: Callable[[str], bool],
     length: int = PUBLIC_ID_LENGTH,
     attempts: int = MAX_ID_ATTEMPTS,
     generator: Callable[[int], str] = new_public_id,
) -> str:
     """
     Draw candidates until `exists` reports one free.

     Raises:
          IdentifierExhausted: After `attempts` taken candidates.
     """
     for _ in range(attempts):
          candidate = generator(length)
          if not exists(candidate):
               return candidate
     raise IdentifierExhausted(f"Could not allocate a unique id after {attempts} attempts")


@dataclass(frozen=True)
class ApiKeySecret:
     plaintext: str
     prefix: str
     last4: str


def api_key_prefix(key_type: ApiKeyType, environment: Environment) -> str:
     """Non-secret prefix such as byund_sk_live or byund_pk_test."""
     kind = "sk" if key_type == ApiKeyType.SECRET else "pk"
     env = "live" if environment == Environment.LIVE else "test"
     return f"{API_KEY_PRODUCT}_{kind}_{env}"


def new_api_key_secret(key_type: ApiKeyType, environment: Environment) -> ApiKeySecret:
     """Build `<prefix>_<random>` with 256 bits of base64url randomness."""
     prefix = api_key_prefix(key_type, environment)
     rand = base64.urlsafe_b64encode(secrets.token_bytes(API_KEY_RANDOM_BYTES)).rstrip(b"=").decode("ascii")
     plaintext = f"{prefix}_{rand}"
     return ApiKeySecret(plaintext=plaintext, prefix=prefix, last4=plaintext[-4:])


def add_with_unique_retry(db: Session, build: Callable[[], T], attempts: int = MAX_ID_ATTEMPTS) -> T:
     """
     Insert the object returned by `build()`, rebuilding it when the insert
     hits a unique constraint.

     Each attempt runs in a SAVEPOINT so a collision rolls back only that
     insert, not the surrounding request transaction.

     Raises:
          IdentifierExhausted: If every attempt collided.
     """
     for attempt in range(1, attempts + 1):
          obj = build()
          try:
               with db.begin_nested():
                    db.add(obj)
                    db.flush()
          except IntegrityError:
               logger.warning("Unique identifier collision on insert (attempt %d/%d)", attempt, attempts)
               continue
          return obj
     raise IdentifierExhausted(f"Insert still colliding after {attempts} attempts")
