from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.schemas import dump, dump_all
from inventario.utils.responses import envelope
from . import schemas, services

router = APIRouter(prefix="/ventas", tags=["ventas"])


@router.get("/")
def list_sales(db: Session = Depends(get_db)):
    ventas = services.list_sales(db)
    return envelope(
        "Ventas listadas exitosamente",
        ventas=dump_all(ventas, schemas.VentaRead),
        total=len(ventas),
    )


@router.get("/buscar-producto")
def find_product_in_orders(nombre: Optional[str] = Query(None), db: Session = Depends(get_db)):
    linea = services.find_product_in_orders(db, nombre)
    producto = schemas.ProductoEnPedido(id=linea.producto_id, nombre=linea.producto_nombre)
    return envelope("Producto encontrado en pedidos", producto=producto.model_dump(by_alias=True))


@router.get("/{sale_id}")
def get_sale(sale_id: int, db: Session = Depends(get_db)):
    venta = services.get_sale(db, sale_id)
    return envelope("Venta encontrada exitosamente", venta=dump(venta, schemas.VentaRead))


@router.post("/", status_code=status.HTTP_201_CREATED)
def record_sale(payload: schemas.VentaCreate, db: Session = Depends(get_db)):
    venta = services.record_sale(db, payload)
    db.commit()
    db.refresh(venta)
    return envelope("Venta registrada exitosamente", venta=dump(venta, schemas.VentaRead))


@router.delete("/{sale_id}")
def delete_sale(sale_id: int, db: Session = Depends(get_db)):
    services.delete_sale(db, sale_id)
    db.commit()
    return envelope("Venta eliminada exitosamente")
