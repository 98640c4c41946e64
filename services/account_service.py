# services/account_service.py
"""
Registration and credential checks.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Merchant, User
from services.errors import AuthenticationFailure, Conflict
from services.session_auth import IssuedSession, create_session, rotate_session

logger = logging.getLogger(__name__)

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class RegisteredAccount:
     user: User
     merchant: Merchant
     session: IssuedSession


@dataclass(frozen=True)
class LoginOutcome:
     user: User
     session: IssuedSession
     onboarding_required: bool


def normalize_email(email: str) -> str:
     return email.strip().lower()


def register_account(db: Session, name: str, email: str, password: str) -> RegisteredAccount:
     """
     Create a user with an attached merchant profile and sign them in.

     Raises:
          Conflict: If the email is already registered.
     """
     email = normalize_email(email)
     if db.query(User.id).filter(User.email == email).first():
          raise Conflict("Email already in use")

     user = User(email=email, password_hash=pwd_context.hash(password))
     merchant = Merchant(user=user, public_name=name.strip(), settlement_wallet=None)
     db.add_all([user, merchant])
     try:
          db.flush()
     except IntegrityError:
          # Lost a race with a concurrent registration for the same email
          raise Conflict("Email already in use")

     session = create_session(db, user.id)
     logger.info("Registered user_id=%s merchant_id=%s", user.id, merchant.id)
     return RegisteredAccount(user=user, merchant=merchant, session=session)


def verify_credentials(db: Session, email: str, password: str) -> Optional[User]:
     """The user for these credentials, or None. Unknown email and wrong password look the same."""
     user = db.query(User).filter(User.email == normalize_email(email)).first()
     if user is None:
          return None
     if not pwd_context.verify(password, user.password_hash):
          return None
     return user


def login(db: Session, email: str, password: str) -> LoginOutcome:
     """
     Check credentials and rotate the user's sessions.

     Raises:
          AuthenticationFailure: On unknown email or wrong password.
     """
     user = verify_credentials(db, email, password)
     if user is None:
          raise AuthenticationFailure("Invalid credentials")

     merchant = user.merchant
     wallet = (merchant.settlement_wallet or "").strip() if merchant else ""
     onboarding_required = merchant is None or not wallet

     session = rotate_session(db, user.id)
     return LoginOutcome(user=user, session=session, onboarding_required=onboarding_required)
