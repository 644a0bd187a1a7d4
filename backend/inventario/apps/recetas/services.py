from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from inventario.apps.materiales import models as material_models
from . import models, schemas

logger = logging.getLogger(__name__)


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def list_recipes(db: Session) -> List[models.Receta]:
    return (
        db.query(models.Receta)
        .order_by(models.Receta.fecha_creacion.desc(), models.Receta.id.desc())
        .all()
    )


def get_recipe(db: Session, recipe_id: int) -> models.Receta:
    receta = db.get(models.Receta, recipe_id)
    if not receta:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Receta no encontrada con ID: {recipe_id}",
        )
    return receta


def _validate(payload: schemas.RecetaIn) -> None:
    if _blank(payload.tiempo_fabricacion):
        raise _bad_request("El tiempo de fabricación es requerido")
    if _blank(payload.instrucciones):
        raise _bad_request("Las instrucciones son requeridas")


def _build_materials(db: Session, materiales: List[schemas.RecetaMaterialIn]) -> List[models.RecetaMaterial]:
    """Turn the request lines into rows; name and unit default to the raw material's."""
    rows = []
    for item in materiales:
        if item.cantidad is None or item.cantidad <= 0:
            raise _bad_request("La cantidad de cada material debe ser mayor a cero")
        nombre, unidad = item.nombre, item.unidad
        if item.materia_id is not None:
            materia = db.get(material_models.MateriaPrima, item.materia_id)
            if not materia:
                raise _bad_request(f"Material no encontrado ID: {item.materia_id}")
            nombre = nombre or materia.nombre
            unidad = unidad or materia.unidad
        elif _blank(nombre):
            raise _bad_request("Cada material requiere materiaId o nombre")
        rows.append(
            models.RecetaMaterial(
                materia_id=item.materia_id,
                cantidad=item.cantidad,
                unidad=unidad,
                nombre=nombre,
            )
        )
    return rows


def create_recipe(db: Session, payload: schemas.RecetaIn) -> models.Receta:
    _validate(payload)
    receta = models.Receta(
        producto_id=payload.producto_id,
        tiempo_fabricacion=payload.tiempo_fabricacion,
        instrucciones=payload.instrucciones,
        notas=payload.notas,
        herramientas=payload.herramientas,
        creado_por=payload.creado_por,
    )
    receta.materiales = _build_materials(db, payload.materiales or [])
    db.add(receta)
    db.flush()
    logger.info("Created recipe %s with %s materials", receta.id, len(receta.materiales))
    return receta


def update_recipe(db: Session, recipe_id: int, payload: schemas.RecetaIn) -> models.Receta:
    """
    Overwrite the recipe fields. The material list is replaced only when
    the payload carries one; `materiales: []` clears it.
    """
    receta = get_recipe(db, recipe_id)
    _validate(payload)
    receta.producto_id = payload.producto_id
    receta.tiempo_fabricacion = payload.tiempo_fabricacion
    receta.instrucciones = payload.instrucciones
    receta.notas = payload.notas
    receta.herramientas = payload.herramientas
    if payload.materiales is not None:
        receta.materiales = _build_materials(db, payload.materiales)
    db.flush()
    return receta


def delete_recipe(db: Session, recipe_id: int) -> None:
    receta = get_recipe(db, recipe_id)
    db.delete(receta)
    db.flush()
    logger.info("Deleted recipe %s", recipe_id)
