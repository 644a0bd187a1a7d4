from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventario.apps.productos import models as producto_models
from inventario.apps.ventas import schemas as venta_schemas
from inventario.apps.ventas import services as venta_services
from . import models, schemas

logger = logging.getLogger(__name__)

RESUMEN_MAX_CHARS = 30

# Zone used to read `?fecha=` days; None is the server's local zone.
LOCAL_TZ: Optional[tzinfo] = None


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def build_summary(nombres: List[str]) -> str:
    """
    Short description of an order for list views.

    A single product is shown as is; several are shown as the first name
    cut to 30 characters plus `... (+N items)`.
    """
    primero = nombres[0] or ""
    if len(nombres) > 1:
        return f"{primero[:RESUMEN_MAX_CHARS]}... (+{len(nombres) - 1} items)"
    return primero


def list_orders(db: Session) -> List[models.Pedido]:
    return (
        db.query(models.Pedido)
        .order_by(models.Pedido.fecha_creacion.desc(), models.Pedido.id.desc())
        .all()
    )


def parse_day(fecha: Optional[str]) -> date:
    if not fecha or not fecha.strip():
        raise _bad_request("El parámetro 'fecha' es requerido. Ejemplo: ?fecha=2025-11-23")
    try:
        return datetime.strptime(fecha.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise _bad_request("Formato de fecha inválido. Use YYYY-MM-DD")


def utc_bounds_for_day(day: date, tz: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """
    Naive UTC [start, end) of a calendar day in `tz`.

    `fecha_creacion` is stored in UTC; `tz=None` means the server's local
    zone, which is how order dates are read back by the workshop.
    """

    def _to_utc(moment: datetime) -> datetime:
        aware = moment.replace(tzinfo=tz) if tz is not None else moment.astimezone()
        return aware.astimezone(timezone.utc).replace(tzinfo=None)

    start = datetime.combine(day, time.min)
    return _to_utc(start), _to_utc(start + timedelta(days=1))


def list_orders_for_day(db: Session, day: date) -> List[models.Pedido]:
    start, end = utc_bounds_for_day(day, LOCAL_TZ)
    return (
        db.query(models.Pedido)
        .filter(models.Pedido.fecha_creacion >= start, models.Pedido.fecha_creacion < end)
        .order_by(models.Pedido.fecha_creacion.desc(), models.Pedido.id.desc())
        .all()
    )


def get_order(db: Session, order_id: int) -> models.Pedido:
    pedido = db.query(models.Pedido).filter(models.Pedido.id == order_id).first()
    if not pedido:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pedido no encontrado con ID: {order_id}",
        )
    return pedido


def create_order(db: Session, payload: schemas.PedidoCreate) -> models.Pedido:
    if not payload.cliente_nombre or not payload.cliente_nombre.strip():
        raise _bad_request("El nombre del cliente es requerido")
    if not payload.productos:
        raise _bad_request("Debe agregar al menos un producto al pedido")
    if payload.total is None or payload.total <= 0:
        raise _bad_request("El total del pedido debe ser mayor a cero")

    pedido = models.Pedido(
        cliente_nombre=payload.cliente_nombre,
        cliente_contacto=payload.cliente_contacto,
        fecha_entrega=payload.fecha_entrega,
        notas=payload.notas,
        etapa=payload.etapa or models.ETAPA_INICIAL,
        total=payload.total,
        anticipo=payload.anticipo,
        total_cantidad=sum(p.cantidad for p in payload.productos),
        resumen_producto=build_summary([p.producto_nombre or "" for p in payload.productos]),
        creado_por=payload.creado_por or "admin",
    )
    for linea in payload.productos:
        subtotal = linea.subtotal
        if subtotal is None and linea.precio_unitario is not None:
            subtotal = linea.precio_unitario * linea.cantidad
        pedido.productos.append(
            models.PedidoProducto(
                producto_id=linea.producto_id,
                producto_nombre=linea.producto_nombre or "",
                cantidad=linea.cantidad,
                precio_unitario=linea.precio_unitario,
                subtotal=subtotal,
            )
        )
    db.add(pedido)
    db.flush()
    logger.info("Created order %s for %s", pedido.id, pedido.cliente_nombre)
    return pedido


def _book_sale(db: Session, pedido: models.Pedido) -> None:
    """
    Register the sale of a finished order from its first product line.

    Best effort: the stage change stands even when the sale cannot be booked.
    """
    if not pedido.productos:
        return
    linea = pedido.productos[0]
    if linea.producto_id is None:
        logger.info("Order %s finished without catalogue product; no sale booked", pedido.id)
        return
    if db.get(producto_models.Producto, linea.producto_id) is None:
        logger.warning(
            "Could not book sale for finished order: unknown product",
            extra={"pedido_id": pedido.id, "producto_id": linea.producto_id},
        )
        return
    precio = int(linea.precio_unitario) if linea.precio_unitario is not None else 0
    payload = venta_schemas.VentaCreate(
        cliente_id=1,
        producto_id=linea.producto_id,
        cantidad=linea.cantidad,
        precio_unitario=precio,
        fecha=date.today(),
        tipo="pedido",
        usuario_registro="Sistema",
    )
    try:
        with db.begin_nested():
            venta_services.record_sale(db, payload)
    except HTTPException as exc:
        logger.warning(
            "Could not book sale for finished order",
            extra={"pedido_id": pedido.id, "error": exc.detail},
        )
    except SQLAlchemyError as exc:
        logger.warning(
            "Could not book sale for finished order",
            extra={"pedido_id": pedido.id, "error": str(exc)},
        )


def update_stage(db: Session, order_id: int, etapa: Optional[str], notas: Optional[str]) -> models.Pedido:
    if not etapa or not etapa.strip():
        raise _bad_request("La nueva etapa es requerida")
    pedido = get_order(db, order_id)
    pedido.etapa = etapa
    pedido.etapas.append(models.PedidoEtapa(etapa=etapa, notas=notas, usuario="sistema"))
    db.flush()

    if etapa == models.ETAPA_FINALIZADO:
        _book_sale(db, pedido)
    return pedido


def delete_order(db: Session, order_id: int) -> None:
    pedido = get_order(db, order_id)
    db.delete(pedido)
    db.flush()

