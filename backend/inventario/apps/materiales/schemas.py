from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from inventario.schemas import CamelModel

from .models import TipoMovimiento


class MateriaPrimaBase(CamelModel):
    nombre: Optional[str] = None
    descripcion: Optional[str] = None
    unidad: Optional[str] = None
    stock_minimo: Optional[int] = None
    costo: Optional[float] = None
    categoria: Optional[str] = None


class MateriaPrimaCreate(MateriaPrimaBase):
    cantidad: Optional[int] = None
    creado_por: Optional[str] = None


class MateriaPrimaUpdate(MateriaPrimaBase):
    # Ignored: stock only changes through /stock and consumption.
    cantidad: Optional[int] = None


class StockUpdate(CamelModel):
    cantidad: Optional[int] = None
    usuario_id: Optional[str] = None
    nota: Optional[str] = None


class MateriaPrimaRead(CamelModel):
    id: int
    nombre: str
    descripcion: Optional[str] = None
    cantidad: int
    unidad: str
    stock_minimo: int
    costo: float
    categoria: str
    activo: bool
    creado_por: Optional[str] = None
    fecha_creacion: Optional[datetime] = None


class MovimientoRead(CamelModel):
    id: int
    materia_id: int
    fecha: date
    tipo: TipoMovimiento
    cantidad: int
    usuario_id: Optional[str] = None
    fecha_registro: Optional[datetime] = None
