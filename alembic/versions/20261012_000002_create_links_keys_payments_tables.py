"""Create api_keys, payment_links and payments tables

Revision ID: 20261012_000002
Revises: 20261012_000001
Create Date: 2026-10-12

Everything below is partitioned by environment (TEST / LIVE).
Payments keep a RESTRICT foreign key so a link with payments cannot be
deleted out from under them.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261012_000002"
down_revision: Union[str, None] = "20261012_000001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "api_keys",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("merchant_id", sa.String(36), nullable=False),
        sa.Column("environment", sa.Enum("TEST", "LIVE", name="environment"), nullable=False),
        sa.Column(
            "type",
            sa.Enum("SECRET", "PUBLISHABLE", name="api_key_type", create_constraint=True),
            nullable=False,
        ),
        sa.Column("key_hash", sa.String(64), nullable=False),
        sa.Column("prefix", sa.String(32), nullable=False),
        sa.Column("last4", sa.String(4), nullable=False),
        sa.Column("name", sa.String(80), nullable=True),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "REVOKED", name="api_key_status", create_constraint=True),
            server_default="ACTIVE",
            nullable=False,
        ),
        sa.Column("scopes", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("revoked_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["merchant_id"],
            ["merchants.id"],
            name="fk_api_keys_merchant_id",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("key_hash", name="uq_api_keys_key_hash"),
    )
    op.create_index("ix_api_keys_merchant_id", "api_keys", ["merchant_id"])
    op.create_index("ix_api_keys_key_hash", "api_keys", ["key_hash"])
    op.create_index("ix_api_keys_status", "api_keys", ["status"])

    op.create_table(
        "payment_links",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("merchant_id", sa.String(36), nullable=False),
        sa.Column("environment", sa.Enum("TEST", "LIVE", name="environment"), nullable=False),
        sa.Column("public_id", sa.String(32), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("description", sa.String(280), nullable=True),
        sa.Column(
            "mode",
            sa.Enum("FIXED", "VARIABLE", name="link_mode", create_constraint=True),
            nullable=False,
        ),
        sa.Column("fixed_amount_cents", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["merchant_id"],
            ["merchants.id"],
            name="fk_payment_links_merchant_id",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("public_id", name="uq_payment_links_public_id"),
    )
    op.create_index("ix_payment_links_merchant_id", "payment_links", ["merchant_id"])
    op.create_index("ix_payment_links_public_id", "payment_links", ["public_id"])
    op.create_index(
        "ix_payment_links_merchant_env_created",
        "payment_links",
        ["merchant_id", "environment", "created_at"],
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("link_id", sa.String(36), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "CREATED", "SUBMITTED", "CONFIRMED", "FAILED", "CANCELED",
                name="payment_status",
                create_constraint=True,
            ),
            server_default="CREATED",
            nullable=False,
        ),
        sa.Column("amount_usd_cents", sa.Integer(), nullable=False),
        sa.Column("amount_usdc_micros", sa.BigInteger(), nullable=False),
        sa.Column("token_address", sa.String(42), nullable=False),
        sa.Column("chain_id", sa.Integer(), server_default="8453", nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["link_id"],
            ["payment_links.id"],
            name="fk_payments_link_id",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_payments_link_id", "payments", ["link_id"])
    op.create_index("ix_payments_status", "payments", ["status"])


def downgrade() -> None:
    op.drop_index("ix_payments_status", table_name="payments")
    op.drop_index("ix_payments_link_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_payment_links_merchant_env_created", table_name="payment_links")
    op.drop_index("ix_payment_links_public_id", table_name="payment_links")
    op.drop_index("ix_payment_links_merchant_id", table_name="payment_links")
    op.drop_table("payment_links")
    op.drop_index("ix_api_keys_status", table_name="api_keys")
    op.drop_index("ix_api_keys_key_hash", table_name="api_keys")
    op.drop_index("ix_api_keys_merchant_id", table_name="api_keys")
    op.drop_table("api_keys")
