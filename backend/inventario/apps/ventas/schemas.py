from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from inventario.schemas import CamelModel


class VentaCreate(CamelModel):
    cliente_id: Optional[int] = None
    producto_id: Optional[int] = None
    cantidad: Optional[int] = None
    precio_unitario: Optional[int] = None
    fecha: Optional[date] = None
    tipo: Optional[str] = None
    usuario_registro: Optional[str] = None


class VentaRead(CamelModel):
    id: int
    cliente_id: int
    producto_id: int
    producto_modelo: Optional[str] = None
    cantidad: int
    precio_unitario: int
    precio_total: int
    fecha: date
    tipo: str
    usuario_registro: str
    fecha_registro: Optional[datetime] = None


class ProductoEnPedido(CamelModel):
    id: Optional[int] = None
    nombre: str
