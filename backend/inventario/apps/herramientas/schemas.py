from __future__ import annotations

from datetime import datetime
from typing import Optional

from inventario.schemas import CamelModel


class HerramientaCreate(CamelModel):
    nombre: Optional[str] = None
    descripcion: Optional[str] = None
    cantidad_total: Optional[int] = None
    creado_por: Optional[str] = None


class StockUpdate(CamelModel):
    cantidad: Optional[int] = None


class Asignacion(CamelModel):
    usuario_asignado: Optional[str] = None
    asignado_por: Optional[str] = None


class HerramientaRead(CamelModel):
    id: int
    nombre: str
    descripcion: Optional[str] = None
    cantidad_total: int
    cantidad_disponible: int
    estatus: str
    usuario_asignado: Optional[str] = None
    asignado_por: Optional[str] = None
    fecha_asignacion: Optional[datetime] = None
    activo: bool
    creado_por: Optional[str] = None
    fecha_creacion: Optional[datetime] = None
    fecha_actualizacion: Optional[datetime] = None
