from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.schemas import dump, dump_all
from inventario.utils.responses import envelope
from . import schemas, services

router = APIRouter(prefix="/herramientas", tags=["herramientas"])


@router.get("/")
def list_tools(
    buscar: Optional[str] = Query(None),
    estatus: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    herramientas = services.list_tools(db, buscar=buscar, estatus=estatus)
    return envelope(data=dump_all(herramientas, schemas.HerramientaRead), total=len(herramientas))


@router.get("/{id_o_nombre}")
def get_tool(id_o_nombre: str, db: Session = Depends(get_db)):
    return envelope(data=dump(services.get_tool(db, id_o_nombre), schemas.HerramientaRead))


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_tool(payload: schemas.HerramientaCreate, db: Session = Depends(get_db)):
    try:
        herramienta = services.create_tool(db, payload)
    except HTTPException as exc:
        raise HTTPException(
            status_code=exc.status_code,
            detail=f"Error al crear herramienta: {exc.detail}",
        )
    db.commit()
    db.refresh(herramienta)
    return envelope("Herramienta creada exitosamente", data=dump(herramienta, schemas.HerramientaRead))


@router.put("/{id_o_nombre}/stock")
def update_stock(id_o_nombre: str, payload: schemas.StockUpdate, db: Session = Depends(get_db)):
    services.set_stock(db, id_o_nombre, payload.cantidad)
    db.commit()
    return envelope("Stock actualizado exitosamente")


@router.put("/{id_o_nombre}/tomar")
def lend_tool(id_o_nombre: str, payload: schemas.Asignacion, db: Session = Depends(get_db)):
    services.lend_tool(db, id_o_nombre, payload.usuario_asignado, payload.asignado_por)
    db.commit()
    return envelope("Herramienta asignada exitosamente")


@router.put("/{id_o_nombre}/devolver")
def return_tool(id_o_nombre: str, db: Session = Depends(get_db)):
    services.return_tool(db, id_o_nombre)
    db.commit()
    return envelope("Herramienta devuelta exitosamente")


@router.delete("/{id_o_nombre}")
def delete_tool(id_o_nombre: str, db: Session = Depends(get_db)):
    services.deactivate_tool(db, id_o_nombre)
    db.commit()
    return envelope("Herramienta eliminada exitosamente")
