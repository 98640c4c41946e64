"""Shared fixtures: an in-memory SQLite database and a TestClient over the app."""

import os
import sys
from datetime import datetime, timedelta

# Must be set before database/config are imported anywhere.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("USDC_BASE_TOKEN_ADDRESS", "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913")

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient

from database import SessionLocal, engine, get_session_context
from models import Base, Environment, LinkMode, Merchant, Payment, PaymentLink, PaymentStatus, User
from services.account_service import pwd_context

WALLET = "0x52908400098527886e0f7030069857d2e4169ee7"
PASSWORD = "correct horse battery"
BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as test_client:
        yield test_client


def make_merchant(db, email="owner@acme.test", name="Acme Studio", wallet=WALLET, mode=Environment.TEST):
    user = User(email=email, password_hash=pwd_context.hash(PASSWORD))
    merchant = Merchant(user=user, public_name=name, settlement_wallet=wallet, dashboard_mode=mode)
    db.add_all([user, merchant])
    db.flush()
    return merchant


def make_link(db, merchant, public_id, mode=LinkMode.VARIABLE, fixed_amount_cents=None,
              is_active=True, environment=None, minutes=0):
    link = PaymentLink(
        merchant_id=merchant.id,
        environment=environment or merchant.dashboard_mode,
        public_id=public_id,
        name=f"Link {public_id}",
        mode=mode,
        fixed_amount_cents=fixed_amount_cents,
        is_active=is_active,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db.add(link)
    db.flush()
    return link


def make_payment(db, link, cents=1000, status=PaymentStatus.CREATED, minutes=0):
    payment = Payment(
        link_id=link.id,
        status=status,
        amount_usd_cents=cents,
        amount_usdc_micros=cents * 10_000,
        token_address=os.environ["USDC_BASE_TOKEN_ADDRESS"],
        chain_id=8453,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db.add(payment)
    db.flush()
    return payment


@pytest.fixture
def merchant_id():
    """A committed merchant with a wallet, for API tests."""
    with get_session_context() as db:
        return make_merchant(db).id


@pytest.fixture
def signed_in(client, merchant_id):
    response = client.post("/api/auth/login", json={"email": "owner@acme.test", "password": PASSWORD})
    assert response.status_code == 200
    return merchant_id
