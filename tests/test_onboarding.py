"""Unit tests for onboarding step derivation and profile updates."""

from datetime import datetime
from types import SimpleNamespace

import pytest

from conftest import WALLET, make_merchant
from services.errors import ValidationFailure
from services.onboarding_service import (
    OnboardingService,
    compute_initial_step,
    validate_hex_color,
    validate_wallet_address,
)


def merchant_state(name="Acme", wallet=WALLET, step=0, completed_at=None):
    return SimpleNamespace(
        public_name=name,
        settlement_wallet=wallet,
        onboarding_step=step,
        onboarding_completed_at=completed_at,
    )


class TestComputeInitialStep:
    def test_completed_wins(self):
        state = merchant_state(name="", wallet=None, step=0, completed_at=datetime(2026, 1, 1))
        assert compute_initial_step(state) == 3

    @pytest.mark.parametrize("name", [None, "", " ", "A", " A "])
    def test_short_name_forces_profile_step(self, name):
        assert compute_initial_step(merchant_state(name=name, step=3)) == 0

    def test_missing_wallet_forces_wallet_step(self):
        assert compute_initial_step(merchant_state(wallet=None, step=3)) == 1
        assert compute_initial_step(merchant_state(wallet="", step=2)) == 1

    @pytest.mark.parametrize("stored, expected", [(0, 2), (1, 2), (2, 2), (3, 3), (7, 3), (None, 2)])
    def test_stored_step_is_clamped(self, stored, expected):
        assert compute_initial_step(merchant_state(step=stored)) == expected


class TestValidators:
    def test_wallet_is_checksummed(self):
        assert validate_wallet_address("  " + WALLET + " ") == "0x52908400098527886E0F7030069857D2E4169EE7"

    @pytest.mark.parametrize("value", ["", "0x123", "wallet", "0xZZ908400098527886e0f7030069857d2e4169ee7"])
    def test_invalid_wallets(self, value):
        with pytest.raises(ValidationFailure) as exc:
            validate_wallet_address(value)
        assert exc.value.message == "Enter a valid EVM address."

    def test_zero_address(self):
        with pytest.raises(ValidationFailure) as exc:
            validate_wallet_address("0x" + "0" * 40)
        assert exc.value.message == "Zero address can't receive funds."

    def test_hex_colors(self):
        assert validate_hex_color("#0066ff") == "#0066ff"
        for bad in ("0066FF", "#06F", "#GGGGGG", "#0066FF0"):
            with pytest.raises(ValidationFailure):
                validate_hex_color(bad)


class TestOnboardingService:
    def test_steps_only_move_forward(self, db):
        merchant = make_merchant(db, wallet=None)

        OnboardingService.save_wallet(db, merchant.id, WALLET)
        assert merchant.onboarding_step == 2
        OnboardingService.save_profile(db, merchant.id, "Acme Studio")
        assert merchant.onboarding_step == 2

    def test_settings_updates_do_not_advance(self, db):
        merchant = make_merchant(db)
        OnboardingService.save_branding(db, merchant.id, "#000000", "#FFFFFF", advance_to=None)
        assert merchant.onboarding_step == 0
        assert merchant.brand_bg == "#000000"

    def test_complete_keeps_first_timestamp(self, db):
        merchant = make_merchant(db)
        first = OnboardingService.complete(db, merchant.id).onboarding_completed_at
        second = OnboardingService.complete(db, merchant.id).onboarding_completed_at
        assert first is not None
        assert first == second
        assert merchant.onboarding_step == 3

    def test_profile_name_bounds(self, db):
        merchant = make_merchant(db)
        with pytest.raises(ValidationFailure):
            OnboardingService.save_profile(db, merchant.id, " a ")
        with pytest.raises(ValidationFailure):
            OnboardingService.save_profile(db, merchant.id, "x" * 81)
