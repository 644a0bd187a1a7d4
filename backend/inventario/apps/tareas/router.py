from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.schemas import dump, dump_all
from inventario.utils.responses import envelope
from . import schemas, services

router = APIRouter(prefix="/tareas", tags=["tareas"])


@router.get("/")
def list_tasks(
    buscar: Optional[str] = Query(None),
    estado: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    tareas = services.list_tasks(db, buscar=buscar, estado=estado)
    return envelope(data=dump_all(tareas, schemas.TareaRead), total=len(tareas))


@router.get("/trabajador/{trabajador_id}")
def list_tasks_for_worker(
    trabajador_id: str,
    estado: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    tareas = services.list_tasks_for_worker(db, trabajador_id, estado=estado)
    return envelope(data=dump_all(tareas, schemas.TareaRead), total=len(tareas))


@router.get("/{task_id}")
def get_task(task_id: int, db: Session = Depends(get_db)):
    return envelope(data=dump(services.get_task(db, task_id), schemas.TareaRead))


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_task(payload: schemas.TareaIn, db: Session = Depends(get_db)):
    try:
        tarea = services.create_task(db, payload)
    except HTTPException as exc:
        raise HTTPException(
            status_code=exc.status_code,
            detail=f"Error al crear tarea: {exc.detail}",
        )
    db.commit()
    db.refresh(tarea)
    return envelope("Tarea creada exitosamente", data=dump(tarea, schemas.TareaRead))


@router.put("/{task_id}")
def update_task(task_id: int, payload: schemas.TareaIn, db: Session = Depends(get_db)):
    tarea = services.update_task(db, task_id, payload)
    db.commit()
    db.refresh(tarea)
    return envelope("Tarea actualizada exitosamente", data=dump(tarea, schemas.TareaRead))


@router.put("/{task_id}/estado")
def change_state(task_id: int, payload: schemas.EstadoUpdate, db: Session = Depends(get_db)):
    tarea = services.change_state(db, task_id, payload.estado)
    db.commit()
    return envelope("Estado actualizado exitosamente", nuevoEstado=tarea.estado)


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db)):
    services.deactivate_task(db, task_id)
    db.commit()
    return envelope("Tarea eliminada exitosamente")
