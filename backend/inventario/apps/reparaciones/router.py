from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.schemas import dump, dump_all
from inventario.utils.responses import envelope
from . import schemas, services

router = APIRouter(prefix="/reparaciones", tags=["reparaciones"])


@router.get("/")
def list_repairs(
    estado: Optional[str] = Query(None),
    cliente: Optional[str] = Query(None),
    modelo: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    reparaciones = services.list_repairs(db, estado=estado, cliente=cliente, modelo=modelo)
    return envelope(data=dump_all(reparaciones, schemas.ReparacionRead), total=len(reparaciones))


@router.get("/{repair_id}")
def get_repair(repair_id: int, db: Session = Depends(get_db)):
    reparacion = services.get_repair(db, repair_id)
    return envelope(
        data=dump(reparacion, schemas.ReparacionRead),
        saldoPendiente=reparacion.saldo_pendiente,
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_repair(payload: schemas.ReparacionCreate, db: Session = Depends(get_db)):
    reparacion = services.create_repair(db, payload)
    db.commit()
    db.refresh(reparacion)
    return envelope(
        "Reparacion creada exitosamente",
        data=dump(reparacion, schemas.ReparacionRead),
        saldoPendiente=reparacion.saldo_pendiente,
    )


@router.put("/{repair_id}")
def update_repair(repair_id: int, payload: schemas.ReparacionUpdate, db: Session = Depends(get_db)):
    reparacion = services.update_repair(db, repair_id, payload)
    db.commit()
    db.refresh(reparacion)
    return envelope("Reparacion actualizada exitosamente", data=dump(reparacion, schemas.ReparacionRead))


@router.put("/{repair_id}/estado")
def change_state(repair_id: int, payload: schemas.EstadoUpdate, db: Session = Depends(get_db)):
    reparacion = services.change_state(db, repair_id, payload.estado, payload.notas, payload.usuario_id)
    db.commit()
    return envelope("Estado actualizado exitosamente", nuevoEstado=reparacion.estado)


@router.get("/{repair_id}/historial")
def list_history(repair_id: int, db: Session = Depends(get_db)):
    historial = services.list_history(db, repair_id)
    return envelope(data=dump_all(historial, schemas.HistorialRead), total=len(historial))


@router.get("/{repair_id}/recibo")
def get_receipt(repair_id: int, db: Session = Depends(get_db)):
    return envelope("Recibo generado exitosamente", data=services.build_receipt(db, repair_id))


@router.get("/{repair_id}/materiales")
def list_materials_used(repair_id: int, db: Session = Depends(get_db)):
    materiales = services.list_materials_used(db, repair_id)
    return envelope(
        data=dump_all(materiales, schemas.MaterialUtilizadoRead),
        total=len(materiales),
        costoMateriales=services.materials_cost(materiales),
    )


@router.post("/{repair_id}/materiales", status_code=status.HTTP_201_CREATED)
def register_material_used(
    repair_id: int,
    payload: schemas.MaterialUtilizadoCreate,
    db: Session = Depends(get_db),
):
    registro = services.register_material_used(db, repair_id, payload)
    db.commit()
    db.refresh(registro)
    return envelope("Material registrado exitosamente", data=dump(registro, schemas.MaterialUtilizadoRead))


@router.delete("/{repair_id}/materiales/{material_used_id}")
def remove_material_used(repair_id: int, material_used_id: int, db: Session = Depends(get_db)):
    services.remove_material_used(db, repair_id, material_used_id)
    db.commit()
    return envelope("Material eliminado exitosamente")


@router.delete("/{repair_id}")
def delete_repair(repair_id: int, db: Session = Depends(get_db)):
    services.deactivate_repair(db, repair_id)
    db.commit()
    return envelope("Reparacion eliminada exitosamente")
