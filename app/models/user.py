"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, func

from app.models.base import Base

USERNAME_MAX_LEN = 32


class Role(str, enum.Enum):
    """Closed set of authorization tiers."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    password always holds a bcrypt hash. username and email are unique at the
    database level; the service-level check only improves error messages.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(USERNAME_MAX_LEN), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(
        Enum(
            Role,
            name="user_role",
            values_callable=lambda roles: [r.value for r in roles],
            create_constraint=True,
        ),
        nullable=False,
        default=Role.USER,
        server_default=Role.USER.value,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
