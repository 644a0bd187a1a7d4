from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from inventario.schemas import CamelModel


class RecetaMaterialIn(CamelModel):
    materia_id: Optional[int] = None
    cantidad: Optional[Decimal] = None
    unidad: Optional[str] = None
    nombre: Optional[str] = None


class RecetaMaterialRead(CamelModel):
    id: int
    receta_id: int
    materia_id: Optional[int] = None
    cantidad: Decimal
    unidad: Optional[str] = None
    nombre: Optional[str] = None


class RecetaIn(CamelModel):
    producto_id: Optional[int] = None
    tiempo_fabricacion: Optional[str] = None
    instrucciones: Optional[str] = None
    notas: Optional[str] = None
    herramientas: Optional[str] = None
    creado_por: Optional[str] = None
    materiales: Optional[List[RecetaMaterialIn]] = None


class RecetaRead(CamelModel):
    id: int
    producto_id: Optional[int] = None
    tiempo_fabricacion: str
    instrucciones: str
    notas: Optional[str] = None
    herramientas: Optional[str] = None
    creado_por: Optional[str] = None
    fecha_creacion: Optional[datetime] = None
    materiales: List[RecetaMaterialRead] = []
