from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from inventario.schemas import CamelModel


class ProductoBase(CamelModel):
    modelo: Optional[str] = None
    color: Optional[str] = None
    precio: Optional[int] = None
    stock: Optional[int] = None
    tamano: Optional[str] = Field(default=None, alias="tamaño")
    imagen_url: Optional[str] = None
    tipo: Optional[str] = None


class ProductoCreate(ProductoBase):
    creado_por: Optional[str] = None


class ProductoUpdate(ProductoBase):
    pass


class ProductoCatalogo(CamelModel):
    """Reduced shape returned by the type filter."""

    id: int
    modelo: str
    color: str
    precio: int
    stock: int
    tamano: str = Field(alias="tamaño")
    imagen_url: str = ""
    tipo: str


class ProductoRead(ProductoCatalogo):
    activo: bool
    creado_por: Optional[str] = None
    fecha_creacion: Optional[datetime] = None
