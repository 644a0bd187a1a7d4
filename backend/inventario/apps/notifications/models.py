from __future__ import annotations

from datetime import datetime
import enum

from sqlalchemy import Column, DateTime, Enum as SAEnum, Index, JSON, String, Text

from inventario.database import Base
from inventario.utils.identifiers import generate_uuid7


def _utcnow() -> datetime:
    return datetime.utcnow()


# Template keys understood by providers.render_body().
TEMPLATE_LOW_STOCK = "low_stock"


class EmailStatus(str, enum.Enum):
    QUEUED = "QUEUED"
    SENT = "SENT"
    FAILED = "FAILED"
    SKIPPED_NO_PROVIDER = "SKIPPED_NO_PROVIDER"


class EmailLog(Base):
    """
    One row per email the backend tried to send.

    Rows are written even when no provider is configured, so the admin
    listing shows which stock alerts never left the building.
    `correlation_id` ties a row back to its source, e.g.
    `materiaprima:12:low_stock`.
    """

    __tablename__ = "email_logs"
    __table_args__ = (
        Index("ix_email_logs_status_created", "status", "created_at"),
        Index("ix_email_logs_template_recipient", "template_key", "recipient"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid7, index=True)
    template_key = Column(String(128), nullable=False, index=True)
    recipient = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    context_json = Column(JSON, nullable=True)
    correlation_id = Column(String(64), nullable=True, index=True)

    status = Column(
        SAEnum(EmailStatus, name="email_status_enum", native_enum=False),
        nullable=False,
        default=EmailStatus.QUEUED,
        index=True,
    )
    error = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow, index=True)
    sent_at = Column(DateTime, nullable=True)

    @property
    def delivered(self) -> bool:
        return self.status == EmailStatus.SENT

    def __repr__(self) -> str:
        return f"<EmailLog {self.template_key} -> {self.recipient} [{self.status}]>"
