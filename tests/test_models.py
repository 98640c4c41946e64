"""Unit tests for model-level helpers and table naming."""

from sqlalchemy.dialects import mssql, postgresql

from models import Base, Merchant
from models.base import lock_for_update


class TestTableNames:
    def test_every_model_names_its_table(self):
        for mapper in Base.registry.mappers:
            assert "__tablename__" in mapper.class_.__dict__, mapper.class_.__name__

    def test_expected_tables(self):
        assert set(Base.metadata.tables) == {
            "users", "sessions", "merchants", "api_keys", "payment_links", "payments",
        }


class TestLockForUpdate:
    def test_renders_row_locks_per_dialect(self, db):
        query = lock_for_update(db.query(Merchant).filter(Merchant.id == "m-1"), Merchant)

        assert "FOR UPDATE" in str(query.statement.compile(dialect=postgresql.dialect()))
        assert "merchants WITH (UPDLOCK, ROWLOCK)" in str(query.statement.compile(dialect=mssql.dialect()))
