# backend/inventario/apps/usuarios/router_admin.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.schemas import dump, dump_all
from inventario.security import require_roles
from inventario.utils.responses import envelope
from . import models, schemas, services

router = APIRouter(prefix="/usuarios", tags=["usuarios"])

require_admin = require_roles("ADMIN")


@router.get("/", summary="List active users")
def list_users(db: Session = Depends(get_db)):
    users = services.list_users(db)
    return envelope(
        "Usuarios listados exitosamente",
        usuarios=dump_all(users, schemas.UsuarioRead),
        total=len(users),
    )


@router.get("/{user_id}", summary="Get a user by id")
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = services.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usuario no encontrado")
    return envelope("Usuario encontrado exitosamente", usuario=dump(user, schemas.UsuarioRead))


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    summary="Create a user (ADMIN only)",
)
def create_user(
    payload: schemas.UsuarioCreate,
    db: Session = Depends(get_db),
    current_user: models.Usuario = Depends(require_admin),
):
    user = services.create_user(db, payload)
    db.commit()
    db.refresh(user)
    return envelope(
        "Usuario creado exitosamente",
        usuario={
            "id": user.id,
            "username": user.username,
            "rol": user.rol,
            "email": user.email,
            "activo": user.activo,
        },
    )


@router.put("/{user_id}/password", summary="Change a user's password (ADMIN only)")
def change_password(
    user_id: str,
    payload: schemas.PasswordChange,
    db: Session = Depends(get_db),
    current_user: models.Usuario = Depends(require_admin),
):
    user = services.change_password(db, user_id, payload.nueva_password)
    db.commit()
    return envelope("Contraseña actualizada exitosamente", usuario=user.username)


@router.delete("/{user_id}", summary="Deactivate a user (ADMIN only)")
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: models.Usuario = Depends(require_admin),
):
    user = services.deactivate_user(db, user_id)
    db.commit()
    return envelope("Usuario eliminado exitosamente", usuario=user.username)
