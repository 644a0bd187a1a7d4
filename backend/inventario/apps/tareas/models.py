from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text

from inventario.database import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


ESTADO_PENDIENTE = "PENDIENTE"
ESTADO_EN_PROCESO = "EN_PROCESO"
ESTADO_COMPLETADA = "COMPLETADA"
ESTADOS = (ESTADO_PENDIENTE, ESTADO_EN_PROCESO, ESTADO_COMPLETADA)

# Query value meaning "no state filter".
ESTADO_TODAS = "TODAS"


class Tarea(Base):
    __tablename__ = "tareas"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    asunto = Column(String(200), nullable=False)
    detalles = Column(Text, nullable=False)
    fecha_asignacion = Column(Date, nullable=False)
    fecha_entrega = Column(Date, nullable=False)
    cantidad_figuras = Column(Integer, nullable=True)
    estado = Column(String(20), nullable=False, default=ESTADO_PENDIENTE, index=True)
    activo = Column(Boolean, nullable=False, default=True, index=True)
    creado_por = Column(String(100), nullable=False)
    trabajador_id = Column(String(50), nullable=False, index=True)
    fecha_creacion = Column(DateTime, nullable=False, default=_utcnow, index=True)

    def __repr__(self) -> str:
        return f"<Tarea id={self.id} trabajador={self.trabajador_id} estado={self.estado}>"
