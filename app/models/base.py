"""SQLAlchemy declarative Base shared by every ORM model (and alembic autogenerate)."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
