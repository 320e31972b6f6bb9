"""SQLAlchemy Declarative Base — shared metadata for the club ledger tables.

Invariants:
    - Every ORM model inherits from Base, so create_all sees every table
    - Constraint names are deterministic (NAMING_CONVENTION), identical on
      SQLite and PostgreSQL
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
