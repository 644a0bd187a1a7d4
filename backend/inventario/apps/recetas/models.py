from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from inventario.database import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


class Receta(Base):
    """How a catalogue product is made. Recipes are hard-deleted."""

    __tablename__ = "recetario"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    producto_id = Column(Integer, ForeignKey("producto.id"), nullable=True, index=True)
    tiempo_fabricacion = Column(String(100), nullable=False)
    instrucciones = Column(Text, nullable=False)
    notas = Column(Text, nullable=True)
    herramientas = Column(Text, nullable=True)
    creado_por = Column(String(100), nullable=True)
    fecha_creacion = Column(DateTime, nullable=False, default=_utcnow, index=True)

    materiales = relationship(
        "RecetaMaterial",
        back_populates="receta",
        cascade="all, delete-orphan",
        order_by="RecetaMaterial.id",
    )

    def __repr__(self) -> str:
        return f"<Receta id={self.id} producto_id={self.producto_id}>"


class RecetaMaterial(Base):
    __tablename__ = "recetamaterial"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    receta_id = Column(Integer, ForeignKey("recetario.id", ondelete="CASCADE"), nullable=False, index=True)
    materia_id = Column(Integer, ForeignKey("materiaprima.id"), nullable=True, index=True)
    cantidad = Column(Numeric(10, 2), nullable=False)
    unidad = Column(String(50), nullable=True)
    nombre = Column(String(150), nullable=True)

    receta = relationship("Receta", back_populates="materiales")
