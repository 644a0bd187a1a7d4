from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from . import models, schemas

logger = logging.getLogger(__name__)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def list_tools(db: Session, buscar: Optional[str] = None, estatus: Optional[str] = None) -> List[models.Herramienta]:
    qs = db.query(models.Herramienta).filter(models.Herramienta.activo.is_(True))
    if buscar:
        pattern = f"%{buscar}%"
        qs = qs.filter(
            or_(
                models.Herramienta.nombre.like(pattern),
                models.Herramienta.descripcion.like(pattern),
            )
        )
    if estatus:
        qs = qs.filter(models.Herramienta.estatus == estatus)
    return qs.order_by(models.Herramienta.nombre.asc()).all()


def get_tool(db: Session, id_o_nombre: str) -> models.Herramienta:
    """Resolve an active tool by numeric id or by exact name."""
    criteria = [models.Herramienta.nombre == id_o_nombre]
    if id_o_nombre.isdigit():
        criteria.append(models.Herramienta.id == int(id_o_nombre))
    herramienta = (
        db.query(models.Herramienta)
        .filter(or_(*criteria), models.Herramienta.activo.is_(True))
        .order_by(models.Herramienta.id.asc())
        .first()
    )
    if not herramienta:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Herramienta no encontrada: {id_o_nombre}",
        )
    return herramienta


def create_tool(db: Session, payload: schemas.HerramientaCreate) -> models.Herramienta:
    if not payload.nombre or not payload.nombre.strip():
        raise _bad_request("El nombre de la herramienta es requerido")
    if payload.cantidad_total is None or payload.cantidad_total <= 0:
        raise _bad_request("La cantidad debe ser mayor a cero")

    herramienta = models.Herramienta(
        nombre=payload.nombre,
        descripcion=payload.descripcion,
        cantidad_total=payload.cantidad_total,
        cantidad_disponible=payload.cantidad_total,
        estatus=models.ESTATUS_DISPONIBLE,
        creado_por=payload.creado_por,
        activo=True,
    )
    db.add(herramienta)
    db.flush()
    return herramienta


def set_stock(db: Session, id_o_nombre: str, cantidad: Optional[int]) -> models.Herramienta:
    """Reset the tool count; every unit is considered back in the shelf."""
    if cantidad is None:
        raise _bad_request("La cantidad es requerida")
    if cantidad <= 0:
        raise _bad_request("La cantidad debe ser un número positivo")
    herramienta = get_tool(db, id_o_nombre)
    herramienta.cantidad_total = cantidad
    herramienta.cantidad_disponible = cantidad
    db.flush()
    return herramienta


def lend_tool(
    db: Session,
    id_o_nombre: str,
    usuario_asignado: Optional[str],
    asignado_por: Optional[str],
) -> models.Herramienta:
    if not usuario_asignado or not usuario_asignado.strip():
        raise _bad_request("El usuario asignado es requerido")
    herramienta = get_tool(db, id_o_nombre)
    if herramienta.cantidad_disponible <= 0:
        raise _bad_request("No hay stock disponible para asignar")

    herramienta.usuario_asignado = usuario_asignado
    herramienta.asignado_por = asignado_por
    herramienta.estatus = models.ESTATUS_EN_USO
    herramienta.fecha_asignacion = datetime.utcnow()
    herramienta.cantidad_disponible -= 1
    db.flush()
    logger.info("Tool %s lent to %s", herramienta.id, usuario_asignado)
    return herramienta


def return_tool(db: Session, id_o_nombre: str) -> models.Herramienta:
    herramienta = get_tool(db, id_o_nombre)
    if herramienta.cantidad_disponible >= herramienta.cantidad_total:
        raise _bad_request("No hay unidades prestadas para devolver")

    herramienta.usuario_asignado = None
    herramienta.asignado_por = None
    herramienta.fecha_asignacion = None
    herramienta.estatus = models.ESTATUS_DISPONIBLE
    herramienta.cantidad_disponible += 1
    db.flush()
    return herramienta


def deactivate_tool(db: Session, id_o_nombre: str) -> models.Herramienta:
    herramienta = get_tool(db, id_o_nombre)
    herramienta.activo = False
    db.flush()
    return herramienta
