from __future__ import annotations

import logging
import os
from datetime import timedelta
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from inventario.security import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    create_access_token,
    get_password_hash,
    get_user_by_username,
    verify_password,
)
from . import models, schemas

logger = logging.getLogger(__name__)

# Seed accounts the workshop relies on; they can never be deactivated.
PROTECTED_USER_IDS = {
    v.strip()
    for v in os.getenv("PROTECTED_USER_IDS", "admin001,trab001").split(",")
    if v.strip()
}


class AuthenticationError(Exception):
    """Raised when login credentials are invalid."""


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


# ---------------------------------------------------------------------------
# AUTH
# ---------------------------------------------------------------------------


def authenticate_user(db: Session, *, username: str, password: str) -> models.Usuario:
    """
    Password login by username.

    Raises AuthenticationError with the message shown to the client:
    unknown/inactive users and wrong passwords are reported separately.
    """
    user = get_user_by_username(db, username)
    if not user:
        logger.info("Login failed for unknown user %s", username)
        raise AuthenticationError("Usuario no encontrado")
    if not verify_password(password, user.password):
        logger.info("Login failed for user %s: wrong password", username)
        raise AuthenticationError("Contraseña incorrecta")
    logger.info("Login ok for user %s", username)
    return user


def issue_access_token_for_user(user: models.Usuario) -> Tuple[str, int]:
    """
    Create a JWT access token for the user.

    Returns (token_string, expires_in_seconds).
    """
    expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(
        data={"sub": user.username, "rol": user.rol},
        expires_delta=expires_delta,
    )
    return token, int(expires_delta.total_seconds())


# ---------------------------------------------------------------------------
# USER ADMINISTRATION
# ---------------------------------------------------------------------------


def list_users(db: Session) -> List[models.Usuario]:
    return (
        db.query(models.Usuario)
        .filter(models.Usuario.activo.is_(True))
        .order_by(models.Usuario.fecha_creacion.asc(), models.Usuario.id.asc())
        .all()
    )


def get_user(db: Session, user_id: str) -> Optional[models.Usuario]:
    return (
        db.query(models.Usuario)
        .filter(models.Usuario.id == user_id, models.Usuario.activo.is_(True))
        .first()
    )


def _get_user_or_404(db: Session, user_id: str) -> models.Usuario:
    user = get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Usuario no encontrado")
    return user


def create_user(db: Session, payload: schemas.UsuarioCreate) -> models.Usuario:
    if any(_blank(v) for v in (payload.id, payload.username, payload.password, payload.rol)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="ID, username, password y rol son requeridos",
        )
    user_id = payload.id.strip()
    username = payload.username.strip()

    # Deactivated rows still own their id and username.
    if db.query(models.Usuario).filter(models.Usuario.id == user_id).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="El ID de usuario ya esta en uso")
    if db.query(models.Usuario).filter(models.Usuario.username == username).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="El username ya esta en uso")

    user = models.Usuario(
        id=user_id,
        username=username,
        password=get_password_hash(payload.password),
        rol=payload.rol.strip(),
        email=payload.email,
        activo=True,
    )
    db.add(user)
    db.flush()
    logger.info("Created user %s (%s)", user.id, user.rol)
    return user


def change_password(db: Session, user_id: str, new_password: Optional[str]) -> models.Usuario:
    user = _get_user_or_404(db, user_id)
    if _blank(new_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="La nueva contrasena es requerida",
        )
    user.password = get_password_hash(new_password)
    db.flush()
    return user


def deactivate_user(db: Session, user_id: str) -> models.Usuario:
    user = _get_user_or_404(db, user_id)
    if user.id in PROTECTED_USER_IDS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No se puede eliminar usuarios principales del sistema",
        )
    user.activo = False
    db.flush()
    logger.info("Deactivated user %s", user.id)
    return user
