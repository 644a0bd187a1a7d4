from __future__ import annotations

import logging
import os
from datetime import date
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from inventario.apps.notifications import models as notification_models
from inventario.apps.notifications import service as notification_service
from . import models, schemas

logger = logging.getLogger(__name__)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _alert_recipients() -> List[str]:
    raw = os.getenv("STOCK_ALERT_RECIPIENTS", "")
    return [r.strip() for r in raw.split(",") if r.strip()]


# ---------------------------------------------------------------------------
# QUERIES
# ---------------------------------------------------------------------------


def list_materials(
    db: Session,
    buscar: Optional[str] = None,
    categoria: Optional[str] = None,
) -> List[models.MateriaPrima]:
    qs = db.query(models.MateriaPrima).filter(models.MateriaPrima.activo.is_(True))
    if buscar:
        pattern = f"%{buscar}%"
        qs = qs.filter(
            or_(
                models.MateriaPrima.nombre.like(pattern),
                models.MateriaPrima.descripcion.like(pattern),
            )
        )
    if categoria and categoria != models.CATEGORIA_TODAS:
        qs = qs.filter(models.MateriaPrima.categoria == categoria)
    return qs.order_by(models.MateriaPrima.nombre.asc()).all()


def get_material(db: Session, material_id: int) -> models.MateriaPrima:
    material = (
        db.query(models.MateriaPrima)
        .filter(models.MateriaPrima.id == material_id, models.MateriaPrima.activo.is_(True))
        .first()
    )
    if not material:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Material no encontrado ID: {material_id}",
        )
    return material


def list_movements(db: Session, material_id: int) -> List[models.MovimientoMp]:
    return (
        db.query(models.MovimientoMp)
        .filter(models.MovimientoMp.materia_id == material_id)
        .order_by(models.MovimientoMp.fecha.desc(), models.MovimientoMp.fecha_registro.desc())
        .all()
    )


# ---------------------------------------------------------------------------
# WRITES
# ---------------------------------------------------------------------------


def validate_material(
    *,
    nombre: Optional[str],
    cantidad: Optional[int],
    stock_minimo: Optional[int],
    costo: Optional[float],
    unidad: Optional[str],
    categoria: Optional[str],
) -> None:
    if not nombre or not nombre.strip():
        raise _bad_request("El nombre del material es requerido")
    if cantidad is None or cantidad < 0:
        raise _bad_request("La cantidad debe ser un número positivo")
    if stock_minimo is None or stock_minimo < 0:
        raise _bad_request("El stock mínimo debe ser un número positivo")
    if costo is None or costo < 0:
        raise _bad_request("El costo debe ser un número positivo")
    if not unidad or not unidad.strip():
        raise _bad_request("La unidad es requerida")
    if not categoria or not categoria.strip():
        raise _bad_request("La categoría es requerida")


def _record_movement(
    db: Session,
    material: models.MateriaPrima,
    tipo: models.TipoMovimiento,
    cantidad: int,
    usuario_id: Optional[str],
    fecha: Optional[date] = None,
) -> models.MovimientoMp:
    movimiento = models.MovimientoMp(
        materia_id=material.id,
        fecha=fecha or date.today(),
        tipo=tipo,
        cantidad=cantidad,
        usuario_id=usuario_id,
    )
    db.add(movimiento)
    return movimiento


def notify_if_low_stock(db: Session, material: models.MateriaPrima) -> None:
    """Email the stock-alert recipients when a material drops below its minimum."""
    if not material.bajo_minimo:
        return
    recipients = _alert_recipients()
    if not recipients:
        logger.info("Material %s below minimum; no alert recipients configured", material.id)
        return
    context = {
        "materia_id": material.id,
        "material": material.nombre,
        "cantidad": material.cantidad,
        "unidad": material.unidad,
        "stock_minimo": material.stock_minimo,
    }
    try:
        notification_service.send_to_many(
            notification_models.TEMPLATE_LOW_STOCK,
            recipients,
            f"Stock bajo: {material.nombre}",
            context,
            correlation_id=f"materiaprima:{material.id}:low_stock",
            db=db,
        )
    except ValueError as exc:
        # Unknown NOTIFICATIONS_EMAIL_PROVIDER value.
        logger.warning(
            "Low stock alert not sent",
            extra={"materia_id": material.id, "recipients": recipients, "error": str(exc)},
        )


def create_material(db: Session, payload: schemas.MateriaPrimaCreate) -> models.MateriaPrima:
    validate_material(
        nombre=payload.nombre,
        cantidad=payload.cantidad,
        stock_minimo=payload.stock_minimo,
        costo=payload.costo,
        unidad=payload.unidad,
        categoria=payload.categoria,
    )
    material = models.MateriaPrima(
        nombre=payload.nombre,
        descripcion=payload.descripcion,
        cantidad=payload.cantidad,
        unidad=payload.unidad,
        stock_minimo=payload.stock_minimo,
        costo=payload.costo,
        categoria=payload.categoria,
        creado_por=payload.creado_por,
        activo=True,
    )
    db.add(material)
    db.flush()

    if material.cantidad > 0:
        _record_movement(db, material, models.TipoMovimiento.ENTRADA, material.cantidad, material.creado_por)
        db.flush()
    return material


def update_material(db: Session, material_id: int, payload: schemas.MateriaPrimaUpdate) -> models.MateriaPrima:
    material = get_material(db, material_id)
    validate_material(
        nombre=payload.nombre,
        cantidad=material.cantidad,
        stock_minimo=payload.stock_minimo,
        costo=payload.costo,
        unidad=payload.unidad,
        categoria=payload.categoria,
    )
    material.nombre = payload.nombre
    material.descripcion = payload.descripcion
    material.unidad = payload.unidad
    material.stock_minimo = payload.stock_minimo
    material.costo = payload.costo
    material.categoria = payload.categoria
    db.flush()
    notify_if_low_stock(db, material)
    return material


def set_stock(
    db: Session,
    material_id: int,
    cantidad: Optional[int],
    usuario_id: Optional[str],
    nota: Optional[str] = None,
) -> models.MateriaPrima:
    """
    Overwrite the stock count after a physical count.

    The difference is logged as one entrada or salida movement.
    """
    if cantidad is None:
        raise _bad_request("La cantidad es requerida")
    if usuario_id is None:
        raise _bad_request("El usuario es requerido")
    if cantidad < 0:
        raise _bad_request("La cantidad debe ser un número positivo")

    material = get_material(db, material_id)
    diferencia = cantidad - material.cantidad
    material.cantidad = cantidad
    if diferencia != 0:
        tipo = models.TipoMovimiento.ENTRADA if diferencia > 0 else models.TipoMovimiento.SALIDA
        _record_movement(db, material, tipo, abs(diferencia), usuario_id)
    db.flush()
    if nota:
        logger.info("Stock of material %s set to %s: %s", material.id, cantidad, nota)
    notify_if_low_stock(db, material)
    return material


def consume_material(
    db: Session,
    material_id: int,
    cantidad: int,
    usuario_id: Optional[str],
    fecha: Optional[date] = None,
) -> models.MovimientoMp:
    """Take `cantidad` units out of stock for workshop use."""
    if cantidad is None or cantidad <= 0:
        raise _bad_request("La cantidad debe ser un número positivo")
    material = get_material(db, material_id)
    if material.cantidad < cantidad:
        raise _bad_request(
            f"Stock insuficiente de '{material.nombre}': disponible {material.cantidad}, requerido {cantidad}"
        )
    material.cantidad -= cantidad
    movimiento = _record_movement(db, material, models.TipoMovimiento.CONSUMO, cantidad, usuario_id, fecha)
    db.flush()
    notify_if_low_stock(db, material)
    return movimiento


def release_consumption(
    db: Session,
    material_id: int,
    cantidad: int,
    usuario_id: Optional[str],
    fecha: Optional[date] = None,
) -> models.MateriaPrima:
    """
    Undo a `consume_material` call: the units go back into stock and the
    matching consumo movement is removed, so usage totals drop as well.

    Without a matching movement the return is logged as an entrada.
    """
    material = db.get(models.MateriaPrima, material_id)
    if material is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Material no encontrado ID: {material_id}",
        )
    material.cantidad += cantidad

    consumo = (
        db.query(models.MovimientoMp)
        .filter(
            models.MovimientoMp.materia_id == material.id,
            models.MovimientoMp.tipo == models.TipoMovimiento.CONSUMO,
            models.MovimientoMp.cantidad == cantidad,
            models.MovimientoMp.usuario_id == usuario_id,
            models.MovimientoMp.fecha == (fecha or date.today()),
        )
        .order_by(models.MovimientoMp.fecha_registro.desc(), models.MovimientoMp.id.desc())
        .first()
    )
    if consumo is not None:
        db.delete(consumo)
    else:
        logger.info("No consumo movement to reverse for material %s; logging entrada", material.id)
        _record_movement(db, material, models.TipoMovimiento.ENTRADA, cantidad, usuario_id)
    db.flush()
    return material


def deactivate_material(db: Session, material_id: int) -> models.MateriaPrima:
    material = get_material(db, material_id)
    material.activo = False
    db.flush()
    return material
