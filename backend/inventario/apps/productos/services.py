from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from . import media, models, schemas

logger = logging.getLogger(__name__)


def list_products(db: Session) -> List[models.Producto]:
    return (
        db.query(models.Producto)
        .filter(models.Producto.activo.is_(True))
        .order_by(models.Producto.id.asc())
        .all()
    )


def list_products_by_type(db: Session, tipo: Optional[str]) -> List[models.Producto]:
    if not tipo or not tipo.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="El parámetro 'tipo' es requerido",
        )
    return (
        db.query(models.Producto)
        .filter(models.Producto.tipo == tipo.strip(), models.Producto.activo.is_(True))
        .order_by(models.Producto.id.asc())
        .all()
    )


def get_product(db: Session, product_id: int) -> models.Producto:
    producto = (
        db.query(models.Producto)
        .filter(models.Producto.id == product_id, models.Producto.activo.is_(True))
        .first()
    )
    if not producto:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Producto no encontrado")
    return producto


def create_product(db: Session, payload: schemas.ProductoCreate) -> models.Producto:
    required = (payload.modelo, payload.color, payload.precio, payload.stock, payload.creado_por)
    if any(v is None for v in required):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Modelo, color, precio, stock y creadoPor son requeridos",
        )
    producto = models.Producto(
        modelo=payload.modelo,
        color=payload.color,
        precio=payload.precio,
        stock=payload.stock,
        tamano=payload.tamano if payload.tamano is not None else "200x300",
        imagen_url=payload.imagen_url if payload.imagen_url is not None else "",
        creado_por=payload.creado_por,
        tipo=payload.tipo if payload.tipo is not None else "religiosas",
        activo=True,
    )
    db.add(producto)
    db.flush()
    return producto


def update_product(db: Session, product_id: int, payload: schemas.ProductoUpdate) -> models.Producto:
    producto = get_product(db, product_id)
    for field, value in payload.model_dump(exclude_none=True).items():
        setattr(producto, field, value)
    db.flush()
    return producto


def deactivate_product(db: Session, product_id: int) -> models.Producto:
    producto = get_product(db, product_id)
    producto.activo = False
    db.flush()
    return producto


def upload_product_image(file_bytes: bytes, filename: str) -> str:
    try:
        return media.upload_image(file_bytes, filename)
    except media.MediaNotConfigured as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    except media.MediaUploadError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error al subir imagen: {exc}",
        )
