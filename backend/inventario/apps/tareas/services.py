from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from . import models, schemas

logger = logging.getLogger(__name__)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _active(db: Session):
    return db.query(models.Tarea).filter(models.Tarea.activo.is_(True))


def _filter_state(qs, estado: Optional[str]):
    if estado and estado != models.ESTADO_TODAS:
        qs = qs.filter(models.Tarea.estado == estado)
    return qs


def _newest_first(qs) -> List[models.Tarea]:
    return qs.order_by(models.Tarea.fecha_creacion.desc(), models.Tarea.id.desc()).all()


def list_tasks(db: Session, buscar: Optional[str] = None, estado: Optional[str] = None) -> List[models.Tarea]:
    qs = _active(db)
    if buscar:
        like = f"%{buscar}%"
        qs = qs.filter(or_(models.Tarea.asunto.like(like), models.Tarea.detalles.like(like)))
    return _newest_first(_filter_state(qs, estado))


def list_tasks_for_worker(db: Session, trabajador_id: str, estado: Optional[str] = None) -> List[models.Tarea]:
    qs = _active(db).filter(models.Tarea.trabajador_id == trabajador_id)
    return _newest_first(_filter_state(qs, estado))


def get_task(db: Session, task_id: int) -> models.Tarea:
    tarea = _active(db).filter(models.Tarea.id == task_id).first()
    if not tarea:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tarea no encontrada ID: {task_id}",
        )
    return tarea


def validate_task(payload: schemas.TareaIn) -> None:
    if _blank(payload.asunto):
        raise _bad_request("El asunto de la tarea es requerido")
    if _blank(payload.detalles):
        raise _bad_request("Los detalles de la tarea son requeridos")
    if payload.fecha_asignacion is None:
        raise _bad_request("La fecha de asignación es requerida")
    if payload.fecha_entrega is None:
        raise _bad_request("La fecha de entrega es requerida")
    if payload.fecha_entrega < payload.fecha_asignacion:
        raise _bad_request("La fecha de entrega no puede ser anterior a la fecha de asignación")
    if payload.cantidad_figuras is not None and payload.cantidad_figuras < 0:
        raise _bad_request("La cantidad de figuras debe ser un número positivo")
    if _blank(payload.creado_por):
        raise _bad_request("El creador de la tarea es requerido")
    if _blank(payload.trabajador_id):
        raise _bad_request("El ID del trabajador es requerido")


def _check_state(estado: str) -> str:
    estado = estado.strip().upper()
    if estado not in models.ESTADOS:
        raise _bad_request("Estado inválido. Debe ser: PENDIENTE, EN_PROCESO o COMPLETADA")
    return estado


def create_task(db: Session, payload: schemas.TareaIn) -> models.Tarea:
    validate_task(payload)
    estado = _check_state(payload.estado) if payload.estado else models.ESTADO_PENDIENTE
    tarea = models.Tarea(
        asunto=payload.asunto,
        detalles=payload.detalles,
        fecha_asignacion=payload.fecha_asignacion,
        fecha_entrega=payload.fecha_entrega,
        cantidad_figuras=payload.cantidad_figuras,
        estado=estado,
        activo=True,
        creado_por=payload.creado_por,
        trabajador_id=payload.trabajador_id,
    )
    db.add(tarea)
    db.flush()
    logger.info("Assigned task %s to %s", tarea.id, tarea.trabajador_id)
    return tarea


def update_task(db: Session, task_id: int, payload: schemas.TareaIn) -> models.Tarea:
    """Overwrite the task contents; state and author are left alone."""
    tarea = get_task(db, task_id)
    validate_task(payload)
    tarea.asunto = payload.asunto
    tarea.detalles = payload.detalles
    tarea.fecha_asignacion = payload.fecha_asignacion
    tarea.fecha_entrega = payload.fecha_entrega
    tarea.cantidad_figuras = payload.cantidad_figuras
    tarea.trabajador_id = payload.trabajador_id
    db.flush()
    return tarea


def change_state(db: Session, task_id: int, estado: Optional[str]) -> models.Tarea:
    if _blank(estado):
        raise _bad_request("El estado es requerido")
    nuevo = _check_state(estado)
    tarea = get_task(db, task_id)
    tarea.estado = nuevo
    db.flush()
    return tarea


def deactivate_task(db: Session, task_id: int) -> models.Tarea:
    tarea = get_task(db, task_id)
    tarea.activo = False
    db.flush()
    return tarea
