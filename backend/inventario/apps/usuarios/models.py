from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, String

from inventario.database import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


class Usuario(Base):
    """
    Application user.

    Ids are chosen by the administrator (`admin001`, `trab001`, ...) rather
    than generated. Users are never hard-deleted; `activo=False` hides them
    from every lookup, including login.
    """

    __tablename__ = "usuario"

    id = Column(String(50), primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    rol = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True)
    activo = Column(Boolean, nullable=False, default=True)
    fecha_creacion = Column(DateTime, nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        return f"<Usuario id={self.id} username={self.username} rol={self.rol}>"
