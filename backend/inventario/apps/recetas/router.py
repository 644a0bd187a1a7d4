from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.schemas import dump, dump_all
from inventario.utils.responses import envelope
from . import schemas, services

router = APIRouter(prefix="/recetas", tags=["recetas"])


@router.get("/")
def list_recipes(db: Session = Depends(get_db)):
    recetas = services.list_recipes(db)
    return envelope(data=dump_all(recetas, schemas.RecetaRead), total=len(recetas))


@router.get("/trabajador")
def list_recipes_for_worker(db: Session = Depends(get_db)):
    recetas = services.list_recipes(db)
    return envelope(data=dump_all(recetas, schemas.RecetaRead), total=len(recetas), rol="TRABAJADOR")


@router.get("/{recipe_id}")
def get_recipe(recipe_id: int, db: Session = Depends(get_db)):
    return envelope(data=dump(services.get_recipe(db, recipe_id), schemas.RecetaRead))


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_recipe(payload: schemas.RecetaIn, db: Session = Depends(get_db)):
    receta = services.create_recipe(db, payload)
    db.commit()
    db.refresh(receta)
    return envelope("Receta creada exitosamente", data=dump(receta, schemas.RecetaRead))


@router.put("/{recipe_id}")
def update_recipe(recipe_id: int, payload: schemas.RecetaIn, db: Session = Depends(get_db)):
    receta = services.update_recipe(db, recipe_id, payload)
    db.commit()
    db.refresh(receta)
    return envelope("Receta actualizada exitosamente", data=dump(receta, schemas.RecetaRead))


@router.delete("/{recipe_id}")
def delete_recipe(recipe_id: int, db: Session = Depends(get_db)):
    services.delete_recipe(db, recipe_id)
    db.commit()
    return envelope("Receta eliminada exitosamente")
