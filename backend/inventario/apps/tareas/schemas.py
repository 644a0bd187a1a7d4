from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from inventario.schemas import CamelModel


class TareaIn(CamelModel):
    asunto: Optional[str] = None
    detalles: Optional[str] = None
    fecha_asignacion: Optional[date] = None
    fecha_entrega: Optional[date] = None
    cantidad_figuras: Optional[int] = None
    estado: Optional[str] = None
    creado_por: Optional[str] = None
    trabajador_id: Optional[str] = None


class EstadoUpdate(CamelModel):
    estado: Optional[str] = None


class TareaRead(CamelModel):
    id: int
    asunto: str
    detalles: str
    fecha_asignacion: date
    fecha_entrega: date
    cantidad_figuras: Optional[int] = None
    estado: str
    activo: bool
    creado_por: str
    trabajador_id: str
    fecha_creacion: Optional[datetime] = None
