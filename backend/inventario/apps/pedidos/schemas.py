from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from inventario.schemas import CamelModel


class PedidoProductoBase(CamelModel):
    producto_id: Optional[int] = None
    producto_nombre: Optional[str] = None
    cantidad: int = 0
    precio_unitario: Optional[Decimal] = None
    subtotal: Optional[Decimal] = None


class PedidoProductoRead(PedidoProductoBase):
    id: int
    pedido_id: int


class PedidoCreate(CamelModel):
    cliente_nombre: Optional[str] = None
    cliente_contacto: Optional[str] = None
    fecha_entrega: Optional[str] = None
    notas: Optional[str] = None
    etapa: Optional[str] = None
    total: Optional[Decimal] = None
    anticipo: Optional[Decimal] = None
    creado_por: Optional[str] = None
    productos: List[PedidoProductoBase] = []


class EtapaUpdate(CamelModel):
    etapa: Optional[str] = None
    notas: Optional[str] = None


class PedidoRead(CamelModel):
    id: int
    cliente_nombre: str
    cliente_contacto: Optional[str] = None
    fecha_entrega: Optional[str] = None
    notas: Optional[str] = None
    etapa: str
    total: Decimal
    anticipo: Optional[Decimal] = None
    total_cantidad: int
    resumen_producto: Optional[str] = None
    creado_por: str
    fecha_creacion: Optional[datetime] = None
    fecha_actualizacion: Optional[datetime] = None
    productos: List[PedidoProductoRead] = []
