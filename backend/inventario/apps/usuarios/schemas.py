from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from inventario.schemas import CamelModel


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UsuarioLogin(CamelModel):
    id: str
    username: str
    rol: str
    email: Optional[str] = None


class UsuarioRead(UsuarioLogin):
    activo: bool
    fecha_creacion: Optional[datetime] = None


class UsuarioCreate(CamelModel):
    id: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    rol: Optional[str] = None
    email: Optional[str] = None


class PasswordChange(CamelModel):
    nueva_password: Optional[str] = None
