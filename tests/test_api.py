"""End-to-end tests through the FastAPI app with an in-memory database."""

from conftest import PASSWORD, WALLET, make_link, make_merchant
from database import get_session_context
from models import ApiKeyType, Environment, LinkMode, Payment, PaymentStatus
from services.api_key_service import ApiKeyService


def issue_key(merchant_id, key_type=ApiKeyType.SECRET, environment=Environment.TEST, scopes=("payments:read",)):
    with get_session_context() as db:
        return ApiKeyService.issue_key(db, merchant_id, environment, key_type, scopes=scopes).plaintext


class TestAuthApi:
    def test_register_then_use_session(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Acme Studio", "email": "New@Acme.test", "password": PASSWORD},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["ok"] is True
        assert body["merchantId"]
        assert "byund_session" in response.cookies

        state = client.get("/api/onboarding/state")
        assert state.status_code == 200
        assert state.json()["initialStep"] == 1
        assert state.json()["email"] == "new@acme.test"

    def test_duplicate_email(self, client, merchant_id):
        response = client.post(
            "/api/auth/register",
            json={"name": "Again", "email": "OWNER@acme.test", "password": PASSWORD},
        )
        assert response.status_code == 409
        assert response.json() == {"ok": False, "error": "Email already in use"}

    def test_login_failures_look_the_same(self, client, merchant_id):
        wrong_password = client.post("/api/auth/login", json={"email": "owner@acme.test", "password": "nope-nope"})
        unknown_email = client.post("/api/auth/login", json={"email": "ghost@acme.test", "password": PASSWORD})
        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json() == {"ok": False, "error": "Invalid credentials"}

    def test_login_reports_onboarding_state(self, client, merchant_id):
        response = client.post("/api/auth/login", json={"email": "owner@acme.test", "password": PASSWORD})
        assert response.json() == {"ok": True, "onboardingRequired": False}

    def test_logout_ends_session(self, client, signed_in):
        assert client.get("/api/dashboard/context").status_code == 200
        assert client.post("/api/auth/logout").json() == {"ok": True}
        assert client.get("/api/dashboard/context").status_code == 401

    def test_second_login_invalidates_first(self, client, signed_in):
        old_token = client.cookies.get("byund_session")
        client.post("/api/auth/login", json={"email": "owner@acme.test", "password": PASSWORD})
        assert client.cookies.get("byund_session") != old_token

        client.cookies.clear()
        stale = client.get("/api/dashboard/context", headers={"Cookie": f"byund_session={old_token}"})
        assert stale.status_code == 401

    def test_bad_origin_in_production(self, client, monkeypatch):
        monkeypatch.setenv("APP_ENV", "production")
        payload = {"name": "Acme", "email": "prod@acme.test", "password": PASSWORD}

        rejected = client.post("/api/auth/register", json=payload, headers={"Origin": "https://evil.test"})
        assert rejected.status_code == 403
        assert rejected.json() == {"ok": False, "error": "Bad origin"}

        accepted = client.post("/api/auth/register", json=payload, headers={"Origin": "http://testserver"})
        assert accepted.status_code == 201
        assert "__Host-byund_session" in accepted.headers["set-cookie"]
        assert "Secure" in accepted.headers["set-cookie"]


class TestErrorShape:
    def test_unauthenticated(self, client):
        response = client.get("/api/dashboard/context")
        assert response.status_code == 401
        assert response.json() == {"ok": False, "error": "Unauthorized"}
        assert response.headers["cache-control"] == "no-store"

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"ok": False, "error": "Route not found"}

    def test_invalid_body(self, client):
        response = client.post("/api/auth/login", json={"email": "not-an-email"})
        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Invalid input"}

    def test_private_responses_are_not_cached(self, client, signed_in):
        assert client.get("/api/payment-links").headers["cache-control"] == "no-store"


class TestOnboardingApi:
    def test_wallet_step(self, client):
        client.post("/api/auth/register", json={"name": "Acme", "email": "a@acme.test", "password": PASSWORD})

        bad = client.post("/api/onboarding/wallet", json={"settlementWallet": "0x123"})
        assert bad.status_code == 400
        assert bad.json()["error"] == "Enter a valid EVM address."

        good = client.post("/api/onboarding/wallet", json={"settlementWallet": WALLET})
        assert good.json() == {"ok": True, "settlementWallet": "0x52908400098527886E0F7030069857D2E4169EE7"}
        assert client.get("/api/onboarding/state").json()["initialStep"] == 2

        client.post("/api/onboarding/branding", json={"brandBg": "#111111", "brandText": "#EEEEEE"})
        client.post("/api/onboarding/complete")
        state = client.get("/api/onboarding/state", params={"next": "//evil.test"}).json()
        assert state["initialStep"] == 3
        assert state["completed"] is True
        assert state["nextPath"] == "/dashboard"


class TestPaymentLinksApi:
    def test_create_list_toggle(self, client, signed_in):
        created = client.post(
            "/api/payment-links",
            json={"name": "Retainer", "mode": "FIXED", "amount": "25.5"},
        )
        assert created.status_code == 200
        link = created.json()["link"]
        assert link["fixedAmountCents"] == 2550
        assert link["environment"] == "TEST"
        public_id = link["publicId"]

        listing = client.get("/api/payment-links").json()
        assert listing["env"] == "TEST"
        assert [item["publicId"] for item in listing["links"]] == [public_id]

        toggled = client.post(f"/api/payment-links/{public_id}/active", json={"isActive": False, "environment": "TEST"})
        assert toggled.json() == {"ok": True, "isActive": False}

        detail = client.get(f"/api/payment-links/{public_id}").json()
        assert detail["link"]["isActive"] is False
        assert detail["paymentCount"] == 0

    def test_invalid_fixed_amount(self, client, signed_in):
        response = client.post("/api/payment-links", json={"name": "Zero", "mode": "FIXED", "amount": "0"})
        assert response.status_code == 400
        assert response.json() == {"ok": False, "error": "Amount must be greater than 0"}

    def test_wallet_gate(self, client):
        client.post("/api/auth/register", json={"name": "Acme", "email": "a@acme.test", "password": PASSWORD})
        response = client.post("/api/payment-links", json={"name": "Tips", "mode": "VARIABLE"})
        assert response.status_code == 403
        assert response.json()["error"] == "Set your settlement wallet before creating payment links."

    def test_mode_switch_changes_environment(self, client, signed_in):
        client.post("/api/payment-links", json={"name": "Test link", "mode": "VARIABLE"})
        assert client.post("/api/dashboard/mode", json={"mode": "LIVE"}).json() == {"ok": True, "mode": "LIVE"}

        listing = client.get("/api/payment-links").json()
        assert listing["env"] == "LIVE"
        assert listing["links"] == []

    def test_cannot_toggle_another_merchants_link(self, client, signed_in):
        with get_session_context() as db:
            other = make_merchant(db, email="other@acme.test")
            make_link(db, other, "theirs123")

        response = client.post("/api/payment-links/theirs123/active", json={"isActive": False, "environment": "TEST"})
        assert response.status_code == 404

        public = client.get("/api/public/links/theirs123").json()
        assert public["isActive"] is True


class TestPublicCheckoutApi:
    def test_checkout_flow(self, client, merchant_id):
        with get_session_context() as db:
            merchant = make_merchant(db, email="shop@acme.test", name="Shop")
            make_link(db, merchant, "fixed12345ab", mode=LinkMode.FIXED, fixed_amount_cents=2550)

        link = client.get("/api/public/links/fixed12345ab").json()
        assert link["fixedAmountCents"] == 2550
        assert link["fixedAmountDisplay"] == "$25.50"
        assert link["merchant"]["name"] == "Shop"

        mismatch = client.post("/api/public/payments/create", json={"publicId": "fixed12345ab", "amountUsdCents": 100})
        assert mismatch.status_code == 400

        created = client.post("/api/public/payments/create", json={"publicId": "fixed12345ab", "amountUsdCents": 2550})
        assert created.status_code == 200
        payment_id = created.json()["paymentId"]
        assert created.json()["redirectTo"] == f"/pay/fixed12345ab/p/{payment_id}"

        status = client.get(f"/api/public/payments/{payment_id}").json()
        assert status["payment"]["status"] == "CREATED"
        assert status["payment"]["amountDisplay"] == "$25.50"

        canceled = client.post(f"/api/public/payments/{payment_id}/cancel")
        assert canceled.json()["payment"]["status"] == "CANCELED"
        assert client.post(f"/api/public/payments/{payment_id}/cancel").status_code == 409

    def test_whole_number_float_amount(self, client, merchant_id):
        with get_session_context() as db:
            from models import Merchant
            make_link(db, db.get(Merchant, merchant_id), "float1234567")

        created = client.post("/api/public/payments/create", json={"publicId": "float1234567", "amountUsdCents": 2550.0})
        assert created.status_code == 200
        status = client.get(f"/api/public/payments/{created.json()['paymentId']}").json()
        assert status["payment"]["amountUsdCents"] == 2550

        fractional = client.post("/api/public/payments/create", json={"publicId": "float1234567", "amountUsdCents": 25.5})
        assert fractional.status_code == 400

    def test_unknown_link_and_payment(self, client):
        assert client.get("/api/public/links/missing").json() == {"ok": False, "error": "Payment link not found."}
        assert client.get("/api/public/payments/missing").status_code == 404

    def test_missing_token_configuration(self, client, merchant_id, monkeypatch):
        with get_session_context() as db:
            from models import Merchant
            make_link(db, db.get(Merchant, merchant_id), "var123456789")
        monkeypatch.delenv("USDC_BASE_TOKEN_ADDRESS", raising=False)
        monkeypatch.delenv("NEXT_PUBLIC_USDC_BASE_TOKEN_ADDRESS", raising=False)

        response = client.post("/api/public/payments/create", json={"publicId": "var123456789", "amountUsdCents": 100})
        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "Something went wrong."}

    def test_dashboard_sees_payment(self, client, signed_in):
        link = client.post("/api/payment-links", json={"name": "Tips", "mode": "VARIABLE"}).json()["link"]
        client.post("/api/public/payments/create", json={"publicId": link["publicId"], "amountUsdCents": 1234})

        activity = client.get("/api/dashboard/activity", params={"link": link["publicId"]}).json()
        assert len(activity["payments"]) == 1
        assert activity["payments"][0]["amountDisplay"] == "$12.34"
        assert activity["payments"][0]["amountUsdcMicros"] == 12_340_000

        overview = client.get("/api/dashboard/overview").json()
        assert overview["totalLinks"] == 1
        assert overview["confirmedPayments"] == 0


class TestApiV2:
    def _payment_id(self, merchant_id):
        with get_session_context() as db:
            from models import Merchant
            link = make_link(db, db.get(Merchant, merchant_id), "api123456789")
            payment = Payment(
                link_id=link.id,
                status=PaymentStatus.CREATED,
                amount_usd_cents=500,
                amount_usdc_micros=5_000_000,
                token_address=WALLET,
            )
            db.add(payment)
            db.flush()
            return payment.id

    def test_secret_key_reads_payment(self, client, merchant_id):
        payment_id = self._payment_id(merchant_id)
        key = issue_key(merchant_id)

        response = client.get(f"/api/v2/payments/{payment_id}", headers={"Authorization": f"Bearer {key}"})
        assert response.status_code == 200
        assert response.json()["payment"]["amountUsdCents"] == 500

    def test_key_failures(self, client, merchant_id):
        payment_id = self._payment_id(merchant_id)
        url = f"/api/v2/payments/{payment_id}"

        assert client.get(url).status_code == 401
        assert client.get(url, headers={"Authorization": "Bearer nope"}).status_code == 401

        publishable = issue_key(merchant_id, key_type=ApiKeyType.PUBLISHABLE)
        assert client.get(url, headers={"Authorization": f"Bearer {publishable}"}).status_code == 403

        unscoped = issue_key(merchant_id, scopes=())
        assert client.get(url, headers={"Authorization": f"Bearer {unscoped}"}).status_code == 403
        assert client.get("/api/v2/payment-links", headers={"Authorization": f"Bearer {unscoped}"}).status_code == 403

        links_only = issue_key(merchant_id, scopes=("payment_links:read",))
        assert client.get(url, headers={"Authorization": f"Bearer {links_only}"}).status_code == 403
        assert client.get("/api/v2/payment-links", headers={"Authorization": f"Bearer {links_only}"}).status_code == 200

        live = issue_key(merchant_id, environment=Environment.LIVE)
        assert client.get(url, headers={"Authorization": f"Bearer {live}"}).status_code == 404

    def test_key_management(self, client, signed_in):
        created = client.post(
            "/api/v2/keys",
            json={"environment": "TEST", "type": "SECRET", "name": "Server", "scopes": ["payment_links:read"]},
        ).json()
        plaintext = created["key"]
        assert plaintext.startswith("byund_sk_test_")
        assert "keyHash" not in created["apiKey"]

        links = client.get("/api/v2/payment-links", headers={"Authorization": f"Bearer {plaintext}"})
        assert links.status_code == 200
        assert links.json()["env"] == "TEST"

        listed = client.get("/api/v2/keys").json()["keys"]
        assert [k["last4"] for k in listed] == [plaintext[-4:]]

        revoked = client.post(f"/api/v2/keys/{created['apiKey']['id']}/revoke")
        assert revoked.json()["apiKey"]["status"] == "REVOKED"
        assert client.get("/api/v2/payment-links", headers={"Authorization": f"Bearer {plaintext}"}).status_code == 401
