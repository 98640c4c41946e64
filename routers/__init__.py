# routers/__init__.py
from . import auth, dashboard, keys, onboarding, payment_links, public

__all__ = ["auth", "dashboard", "keys", "onboarding", "payment_links", "public"]
