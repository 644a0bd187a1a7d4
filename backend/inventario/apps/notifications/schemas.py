from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from inventario.schemas import CamelModel

from .models import EmailStatus


class EmailLogRead(CamelModel):
    id: str
    template_key: str
    recipient: str
    subject: str
    status: EmailStatus
    delivered: bool
    correlation_id: Optional[str] = None
    error: Optional[str] = None
    context_json: Optional[Dict[str, Any]] = None
    created_at: datetime
    sent_at: Optional[datetime] = None
