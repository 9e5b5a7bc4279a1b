"""ORM model for club members (identity, bearer secret, and RBAC labels)."""

from sqlalchemy import JSON, Column, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base, new_id, utcnow

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests).
LabelList = JSON().with_variant(JSONB(), "postgresql")


class User(Base):
    """
    User provisioned by the identity process; this service only reads it.

    secret: long-lived bearer credential matched against RPC accessToken.
    password: legacy bcrypt hash, nullable.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )
    secret = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False, default="")
    roles = Column(LabelList, nullable=False, default=list)
    permissions = Column(LabelList, nullable=False, default=list)
    image = Column(String(2048), nullable=True)
