from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text

from inventario.database import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


ESTATUS_DISPONIBLE = "Disponible"
ESTATUS_EN_USO = "En Uso"


class Herramienta(Base):
    __tablename__ = "herramienta"
    __table_args__ = (
        CheckConstraint(
            "cantidad_disponible >= 0 AND cantidad_disponible <= cantidad_total",
            name="ck_herramienta_disponible_range",
        ),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nombre = Column(String(150), nullable=False, index=True)
    descripcion = Column(Text, nullable=True)
    cantidad_total = Column(Integer, nullable=False, default=0)
    cantidad_disponible = Column(Integer, nullable=False, default=0)
    estatus = Column(String(50), nullable=False, default=ESTATUS_DISPONIBLE, index=True)
    usuario_asignado = Column(String(100), nullable=True)
    asignado_por = Column(String(100), nullable=True)
    fecha_asignacion = Column(DateTime, nullable=True)
    activo = Column(Boolean, nullable=False, default=True, index=True)
    creado_por = Column(String(100), nullable=True)
    fecha_creacion = Column(DateTime, nullable=False, default=_utcnow)
    fecha_actualizacion = Column(DateTime, nullable=True, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return (
            f"<Herramienta id={self.id} nombre={self.nombre} "
            f"{self.cantidad_disponible}/{self.cantidad_total}>"
        )
