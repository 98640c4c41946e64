# config.py
"""
Environment-driven settings for the Byund backend.

Values are read from the process environment (optionally seeded from a .env
file). Anything that can legitimately change between requests in tests, such
as the settlement token address, is exposed as a function instead of a
module constant.
"""
import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

SESSION_COOKIE_PROD = "__Host-byund_session"
SESSION_COOKIE_DEV = "byund_session"

# Amount ceilings, in integer USD cents
MAX_LINK_AMOUNT_CENTS = 2_000_000_00  # $2,000,000.00
MAX_PAYMENT_AMOUNT_CENTS = 10_000_000_00  # $10,000,000.00


def app_env() -> str:
     return os.getenv("APP_ENV", "development").strip().lower()


def is_production() -> bool:
     return app_env() == "production"


def session_cookie_name() -> str:
     """Host-locked cookie name in production, plain name elsewhere."""
     return SESSION_COOKIE_PROD if is_production() else SESSION_COOKIE_DEV


def session_days() -> int:
     return int(os.getenv("SESSION_DAYS", "14"))


def default_chain_id() -> int:
     return int(os.getenv("DEFAULT_CHAIN_ID", "8453"))


def usdc_token_address() -> Optional[str]:
     """USDC contract used for settlement; None when unset."""
     value = (
          os.getenv("USDC_BASE_TOKEN_ADDRESS", "").strip()
          or os.getenv("NEXT_PUBLIC_USDC_BASE_TOKEN_ADDRESS", "").strip()
     )
     return value or None


def cors_origins() -> List[str]:
     return [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]


def log_level() -> str:
     return os.getenv("LOG_LEVEL", "INFO").upper()
