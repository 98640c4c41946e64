# services/tokens.py
"""
Opaque token generation and one-way hashing.

Session tokens and API keys are persisted only as SHA-256 hex digests, so a
database leak never exposes a usable credential.
"""
import hashlib
import hmac
import secrets

TOKEN_BYTES = 32  # 256-bit


def generate_token() -> str:
     """Return a fresh 256-bit random token as 64 hex characters."""
     return secrets.token_hex(TOKEN_BYTES)


def hash_token(token: str) -> str:
     """Deterministic SHA-256 hex digest of `token`."""
     return hashlib.sha256(token.encode("utf-8")).hexdigest()


def safe_equal(a: str, b: str) -> bool:
     """Constant-time string comparison."""
     return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
