from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from inventario.database import WriteSessionLocal

from . import models, providers

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.utcnow()


def _persist(db: Session, log: models.EmailLog, owns_session: bool) -> None:
    db.add(log)
    if owns_session:
        db.commit()
    else:
        db.flush()


def send_email(
    template_key: str,
    recipient: str,
    subject: str,
    context: dict,
    correlation_id: Optional[str],
    critical: bool = False,
    *,
    db: Optional[Session] = None,
) -> models.EmailLog:
    """
    Record one outgoing email in `email_logs` and hand it to the provider.

    With a caller session the row is only flushed and the caller commits;
    otherwise a write session is opened and committed here. A failing
    provider leaves the row FAILED; the exception propagates only when
    `critical` is set.
    """
    owns_session = db is None
    session = WriteSessionLocal() if owns_session else db
    context = context or {}
    log = models.EmailLog(
        recipient=recipient,
        subject=subject,
        template_key=template_key,
        status=models.EmailStatus.QUEUED,
        context_json=context,
        correlation_id=correlation_id,
    )
    try:
        session.add(log)
        session.flush()

        provider, configured = providers.get_email_provider()
        if not configured:
            log.status = models.EmailStatus.SKIPPED_NO_PROVIDER
            log.error = "No provider configured"
            logger.info("Email %s to %s skipped: no provider", template_key, recipient)
            _persist(session, log, owns_session)
            return log

        try:
            provider.send(
                template_key=template_key,
                recipient=recipient,
                subject=subject,
                context=context,
                correlation_id=correlation_id,
            )
        except Exception as exc:
            log.status = models.EmailStatus.FAILED
            log.error = str(exc)
            logger.warning(
                "Email delivery failed",
                extra={"template_key": template_key, "recipient": recipient, "error": str(exc)},
            )
            _persist(session, log, owns_session)
            if critical:
                raise
            return log

        log.status = models.EmailStatus.SENT
        log.sent_at = _utcnow()
        _persist(session, log, owns_session)
        return log
    finally:
        if owns_session:
            session.close()


def send_to_many(
    template_key: str,
    recipients: Iterable[str],
    subject: str,
    context: dict,
    correlation_id: Optional[str],
    *,
    db: Optional[Session] = None,
) -> List[models.EmailLog]:
    """Best-effort fan-out of the same message; one log row per recipient."""
    return [
        send_email(template_key, recipient, subject, context, correlation_id, db=db)
        for recipient in recipients
    ]


def search_logs(
    db: Session,
    *,
    status: Optional[models.EmailStatus] = None,
    template_key: Optional[str] = None,
    recipient: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[models.EmailLog]:
    EmailLog = models.EmailLog
    filters = []
    if status:
        filters.append(EmailLog.status == status)
    if template_key:
        filters.append(EmailLog.template_key == template_key)
    if recipient:
        filters.append(EmailLog.recipient.ilike(f"%{recipient}%"))
    if start:
        filters.append(EmailLog.created_at >= start)
    if end:
        filters.append(EmailLog.created_at <= end)
    return db.query(EmailLog).filter(*filters).order_by(EmailLog.created_at.desc()).all()
