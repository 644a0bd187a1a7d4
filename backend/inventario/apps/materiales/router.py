from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.schemas import dump, dump_all
from inventario.utils.responses import envelope
from . import schemas, services

router = APIRouter(prefix="/materiales", tags=["materiales"])


@router.get("/")
def list_materials(
    buscar: Optional[str] = Query(None),
    categoria: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    materiales = services.list_materials(db, buscar=buscar, categoria=categoria)
    return envelope(data=dump_all(materiales, schemas.MateriaPrimaRead), total=len(materiales))


@router.get("/{material_id}")
def get_material(material_id: int, db: Session = Depends(get_db)):
    return envelope(data=dump(services.get_material(db, material_id), schemas.MateriaPrimaRead))


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_material(payload: schemas.MateriaPrimaCreate, db: Session = Depends(get_db)):
    try:
        material = services.create_material(db, payload)
    except HTTPException as exc:
        raise HTTPException(status_code=exc.status_code, detail=f"Error al crear material: {exc.detail}")
    db.commit()
    db.refresh(material)
    return envelope("Material creado exitosamente", data=dump(material, schemas.MateriaPrimaRead))


@router.put("/{material_id}")
def update_material(material_id: int, payload: schemas.MateriaPrimaUpdate, db: Session = Depends(get_db)):
    services.update_material(db, material_id, payload)
    db.commit()
    return envelope("Material actualizado exitosamente")


@router.put("/{material_id}/stock")
def update_stock(material_id: int, payload: schemas.StockUpdate, db: Session = Depends(get_db)):
    services.set_stock(db, material_id, payload.cantidad, payload.usuario_id, payload.nota)
    db.commit()
    return envelope("Stock actualizado exitosamente")


@router.get("/{material_id}/movimientos")
def list_movements(material_id: int, db: Session = Depends(get_db)):
    movimientos = services.list_movements(db, material_id)
    return envelope(data=dump_all(movimientos, schemas.MovimientoRead))


@router.delete("/{material_id}")
def delete_material(material_id: int, db: Session = Depends(get_db)):
    services.deactivate_material(db, material_id)
    db.commit()
    return envelope("Material eliminado exitosamente")
