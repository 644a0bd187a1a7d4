from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from inventario.apps.usuarios.models import Usuario
from inventario.database import get_db
from inventario.schemas import dump_all
from inventario.security import require_roles
from inventario.utils.responses import envelope

from . import models, schemas, service

router = APIRouter(prefix="/notificaciones", tags=["notificaciones"])


@router.get("/email-logs")
def list_email_logs(
    status: Optional[models.EmailStatus] = Query(None),
    template_key: Optional[str] = Query(None),
    recipient: Optional[str] = Query(None),
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_roles("ADMIN")),
):
    """Admin view of outgoing mail, newest first."""
    logs = service.search_logs(
        db,
        status=status,
        template_key=template_key,
        recipient=recipient,
        start=start,
        end=end,
    )
    return envelope(data=dump_all(logs, schemas.EmailLogRead), total=len(logs))
