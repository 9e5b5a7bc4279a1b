"""ORM model for club initiatives."""

from sqlalchemy import Column, DateTime, String, func

from app.core.config import settings
from app.models.base import Base, new_id, utcnow


class Initiative(Base):
    """
    A club initiative shown on the public page.

    Rows created without values take the INITIATIVE_DEFAULT_* settings; the
    migration keeps the schema-level server defaults.
    """

    __tablename__ = "initiatives"

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
    name = Column(String(255), nullable=False, default=settings.INITIATIVE_DEFAULT_NAME)
    description = Column(
        String(1024), nullable=False, default=settings.INITIATIVE_DEFAULT_DESCRIPTION
    )
    image = Column(
        String(2048), nullable=False, default=settings.INITIATIVE_DEFAULT_IMAGE
    )
