from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from inventario.database import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


class Producto(Base):
    __tablename__ = "producto"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    modelo = Column(String(150), nullable=False, index=True)
    color = Column(String(100), nullable=False)
    # Whole pesos; the catalogue never uses cents.
    precio = Column(Integer, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    tamano = Column("tamaño", String(50), nullable=False, default="200x300")
    imagen_url = Column(String(500), nullable=False, default="")
    activo = Column(Boolean, nullable=False, default=True, index=True)
    creado_por = Column(String(100), nullable=True)
    fecha_creacion = Column(DateTime, nullable=False, default=_utcnow)
    tipo = Column(String(50), nullable=False, default="religiosas", index=True)

    def __repr__(self) -> str:
        return f"<Producto id={self.id} modelo={self.modelo} stock={self.stock}>"
