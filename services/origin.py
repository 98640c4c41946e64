# services/origin.py
"""
Same-origin check for cookie-authenticated mutations.

Returns a reason instead of raising so callers decide how to respond.
"""
from typing import Optional
from urllib.parse import urlparse


def check_same_origin(origin: Optional[str], host: Optional[str], enforce: bool) -> Optional[str]:
     """None when the request may proceed, otherwise a short reason."""
     if not enforce:
          return None
     if not origin or not host:
          return "missing origin or host header"
     try:
          origin_host = urlparse(origin).netloc
     except ValueError:
          return "unparseable origin"
     if origin_host.lower() != host.lower():
          return "origin does not match host"
     return None


def safe_next_path(raw: object, default: str = "/dashboard") -> str:
     """Only allow same-site absolute paths as post-login redirects."""
     if not isinstance(raw, str) or not raw:
          return default
     if not raw.startswith("/") or raw.startswith("//"):
          return default
     return raw
