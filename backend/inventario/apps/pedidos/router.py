from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.schemas import dump, dump_all
from inventario.utils.responses import envelope
from . import schemas, services

router = APIRouter(prefix="/pedidos", tags=["pedidos"])


@router.get("/fecha")
def list_orders_for_day(fecha: Optional[str] = Query(None), db: Session = Depends(get_db)):
    day = services.parse_day(fecha)
    pedidos = services.list_orders_for_day(db, day)
    return envelope(
        f"{len(pedidos)} pedidos encontrados para la fecha {day.isoformat()}",
        data=dump_all(pedidos, schemas.PedidoRead),
        total=len(pedidos),
        fecha=day.isoformat(),
    )


@router.get("/")
def list_orders(db: Session = Depends(get_db)):
    pedidos = services.list_orders(db)
    return envelope(data=dump_all(pedidos, schemas.PedidoRead), total=len(pedidos))


@router.get("/{order_id}")
def get_order(order_id: int, db: Session = Depends(get_db)):
    return envelope(data=dump(services.get_order(db, order_id), schemas.PedidoRead))


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_order(payload: schemas.PedidoCreate, db: Session = Depends(get_db)):
    pedido = services.create_order(db, payload)
    db.commit()
    db.refresh(pedido)
    return envelope("Pedido creado exitosamente", data=dump(pedido, schemas.PedidoRead))


@router.put("/{order_id}/etapa")
def update_stage(order_id: int, payload: schemas.EtapaUpdate, db: Session = Depends(get_db)):
    pedido = services.update_stage(db, order_id, payload.etapa, payload.notas)
    db.commit()
    db.refresh(pedido)
    return envelope("Etapa del pedido actualizada exitosamente", data=dump(pedido, schemas.PedidoRead))


@router.delete("/{order_id}")
def delete_order(order_id: int, db: Session = Depends(get_db)):
    services.delete_order(db, order_id)
    db.commit()
    return envelope("Pedido eliminado exitosamente")
