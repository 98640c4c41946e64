# models/base.py
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase, Query

# SQL Server ignores FOR UPDATE outside cursors; it takes row locks from table hints
MSSQL_ROW_LOCK = "WITH (UPDLOCK, ROWLOCK)"


def new_id() -> str:
     """Opaque primary key (random UUID4 string)."""
     return str(uuid.uuid4())


def utcnow() -> datetime:
     """Naive UTC timestamp, the form every DateTime column stores."""
     return datetime.now(timezone.utc).replace(tzinfo=None)


def lock_for_update(query: Query, entity) -> Query:
     """
     Row-lock the rows `query` selects from `entity` until the transaction ends.

     Renders FOR UPDATE where the dialect supports it and an UPDLOCK hint on
     SQL Server. SQLite ignores both.
     """
     return query.with_for_update().with_hint(entity, MSSQL_ROW_LOCK, "mssql")


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Every model names its table explicitly.
     """
