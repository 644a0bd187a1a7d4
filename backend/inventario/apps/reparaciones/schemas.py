from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from inventario.schemas import CamelModel

from .models import TipoDocumento


class ReparacionBase(CamelModel):
    cliente_id: Optional[int] = None
    nombre_cliente: Optional[str] = None
    contacto: Optional[str] = None
    modelo: Optional[str] = None
    material_original: Optional[str] = None
    condicion: Optional[str] = None
    costo_total: Optional[int] = None
    anticipo: Optional[int] = None
    fecha_ingreso: Optional[date] = None
    fecha_entrega: Optional[str] = None
    estado: Optional[str] = None
    notas: Optional[str] = None
    imagen_url: Optional[str] = None
    recibo_url: Optional[str] = None


class ReparacionCreate(ReparacionBase):
    creado_por: Optional[str] = None


class ReparacionUpdate(ReparacionBase):
    pass


class EstadoUpdate(CamelModel):
    estado: Optional[str] = None
    notas: Optional[str] = None
    usuario_id: Optional[str] = None


class ReparacionRead(CamelModel):
    id: int
    cliente_id: Optional[int] = None
    nombre_cliente: str
    contacto: Optional[str] = None
    modelo: str
    material_original: Optional[str] = None
    condicion: Optional[str] = None
    costo_total: int
    anticipo: int
    fecha_ingreso: Optional[date] = None
    fecha_entrega: Optional[str] = None
    estado: str
    notas: Optional[str] = None
    imagen_url: Optional[str] = None
    recibo_url: Optional[str] = None
    creado_por: str
    activo: bool
    fecha_registro: Optional[datetime] = None


class HistorialRead(CamelModel):
    id: int
    reparacion_id: int
    fecha: date
    estado: str
    notas: Optional[str] = None
    usuario_id: Optional[str] = None
    fecha_registro: Optional[datetime] = None


class MaterialUtilizadoCreate(CamelModel):
    materia_id: Optional[int] = None
    cantidad: Optional[int] = None
    costo_unitario: Optional[int] = None
    usuario_id: Optional[str] = None


class MaterialUtilizadoRead(CamelModel):
    id: int
    tipo_documento: TipoDocumento
    documento_id: int
    materia_id: int
    cantidad: int
    costo_unitario: int
    costo: int
    fecha: date
    usuario_id: Optional[str] = None
    fecha_registro: Optional[datetime] = None
