from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from inventario.apps.pedidos import models as pedido_models
from inventario.apps.productos import models as producto_models
from . import models, schemas

logger = logging.getLogger(__name__)


def _with_product(db: Session):
    # Sales whose product row is gone are not reported.
    return db.query(models.Venta).join(
        producto_models.Producto, models.Venta.producto_id == producto_models.Producto.id
    )


def list_sales(db: Session) -> List[models.Venta]:
    return _with_product(db).order_by(models.Venta.fecha_registro.desc(), models.Venta.id.desc()).all()


def get_sale(db: Session, sale_id: int) -> models.Venta:
    venta = _with_product(db).filter(models.Venta.id == sale_id).first()
    if not venta:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venta no encontrada")
    return venta


def find_duplicates(db: Session, payload: schemas.VentaCreate) -> List[models.Venta]:
    return (
        db.query(models.Venta)
        .filter(
            models.Venta.cliente_id == payload.cliente_id,
            models.Venta.producto_id == payload.producto_id,
            models.Venta.cantidad == payload.cantidad,
            models.Venta.precio_unitario == payload.precio_unitario,
            models.Venta.fecha == payload.fecha,
            models.Venta.tipo == payload.tipo,
        )
        .order_by(models.Venta.fecha_registro.desc())
        .all()
    )


def record_sale(db: Session, payload: schemas.VentaCreate) -> models.Venta:
    """
    Insert a sale. `precio_total` is derived from quantity and unit price.

    A sale identical to an existing one is accepted (the same customer can
    buy the same figure twice in a day) and only logged.
    """
    values = payload.model_dump()
    if any(v is None or (isinstance(v, str) and not v.strip()) for v in values.values()):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Todos los campos son requeridos")

    duplicates = find_duplicates(db, payload)
    if duplicates:
        logger.info(
            "Sale matches %s existing sale(s)",
            len(duplicates),
            extra={"producto_id": payload.producto_id, "cliente_id": payload.cliente_id, "fecha": str(payload.fecha)},
        )

    venta = models.Venta(
        cliente_id=payload.cliente_id,
        producto_id=payload.producto_id,
        cantidad=payload.cantidad,
        precio_unitario=payload.precio_unitario,
        precio_total=payload.cantidad * payload.precio_unitario,
        fecha=payload.fecha,
        tipo=payload.tipo,
        usuario_registro=payload.usuario_registro,
    )
    db.add(venta)
    db.flush()
    return venta


def delete_sale(db: Session, sale_id: int) -> None:
    venta = db.query(models.Venta).filter(models.Venta.id == sale_id).first()
    if not venta:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venta no encontrada")
    db.delete(venta)
    db.flush()


def find_product_in_orders(db: Session, nombre: Optional[str]) -> pedido_models.PedidoProducto:
    """First order line whose product name contains `nombre`."""
    if not nombre or not nombre.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nombre de producto es requerido")
    linea = (
        db.query(pedido_models.PedidoProducto)
        .filter(pedido_models.PedidoProducto.producto_nombre.like(f"%{nombre}%"))
        .order_by(pedido_models.PedidoProducto.id.asc())
        .first()
    )
    if not linea:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Producto no encontrado en pedidos: {nombre}",
        )
    return linea
