from __future__ import annotations

from datetime import date, datetime
import enum

from sqlalchemy import Boolean, Column, Date, DateTime, Enum as SAEnum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from inventario.database import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


CATEGORIA_TODAS = "Todas las materias primas"


class TipoMovimiento(str, enum.Enum):
    ENTRADA = "entrada"
    SALIDA = "salida"
    CONSUMO = "consumo"


class MateriaPrima(Base):
    __tablename__ = "materiaprima"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nombre = Column(String(150), nullable=False, index=True)
    descripcion = Column(Text, nullable=True)
    cantidad = Column(Integer, nullable=False, default=0)
    unidad = Column(String(50), nullable=False)
    stock_minimo = Column(Integer, nullable=False, default=0)
    costo = Column(Float, nullable=False, default=0.0)
    categoria = Column(String(100), nullable=False, index=True)
    activo = Column(Boolean, nullable=False, default=True, index=True)
    creado_por = Column(String(100), nullable=True)
    fecha_creacion = Column(DateTime, nullable=False, default=_utcnow)

    movimientos = relationship("MovimientoMp", back_populates="materia")

    @property
    def bajo_minimo(self) -> bool:
        return (self.cantidad or 0) < (self.stock_minimo or 0)

    def __repr__(self) -> str:
        return f"<MateriaPrima id={self.id} nombre={self.nombre} cantidad={self.cantidad}>"


class MovimientoMp(Base):
    __tablename__ = "movimientomp"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    materia_id = Column(Integer, ForeignKey("materiaprima.id"), nullable=False, index=True)
    fecha = Column(Date, nullable=False, default=date.today, index=True)
    tipo = Column(
        SAEnum(
            TipoMovimiento,
            name="tipo_movimiento_enum",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        index=True,
    )
    cantidad = Column(Integer, nullable=False)
    usuario_id = Column(String(50), nullable=True)
    fecha_registro = Column(DateTime, nullable=False, default=_utcnow)

    materia = relationship("MateriaPrima", back_populates="movimientos")
