"""
SQLAlchemy model mixins for reusable functionality.
"""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func


class TimestampMixin:
    """
    Mixin for automatic timestamp tracking.

    Provides created_at and updated_at fields with
    automatic timezone-aware timestamp management.
    """

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
        comment="Record creation timestamp (UTC)"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
        comment="Record last update timestamp (UTC)"
    )


class AuditMixin:
    """
    Mixin for audit trail fields.

    Tracks who created the record. Identities are issued by an external
    service, so no foreign key is declared.
    """

    created_by = Column(
        String(64),
        nullable=True,
        index=True,
        comment="User who created the record"
    )
