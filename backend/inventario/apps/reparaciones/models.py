from __future__ import annotations

from datetime import date, datetime
import enum

from sqlalchemy import Boolean, Column, Date, DateTime, Enum as SAEnum, ForeignKey, Index, Integer, String, Text

from inventario.database import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


class EstadoReparacion(str, enum.Enum):
    PENDIENTE = "Pendiente"
    EN_PROCESO = "En Proceso"
    COMPLETADO = "Completado"
    ENTREGADO = "Entregado"


class TipoDocumento(str, enum.Enum):
    REPARACION = "reparacion"
    PEDIDO = "pedido"


class Reparacion(Base):
    __tablename__ = "reparacion"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cliente_id = Column(Integer, nullable=True)
    nombre_cliente = Column(String(200), nullable=False, index=True)
    contacto = Column(String(200), nullable=True)
    modelo = Column(String(200), nullable=False, index=True)
    material_original = Column(String(100), nullable=True, default="Yeso frio")
    condicion = Column(Text, nullable=True)
    costo_total = Column(Integer, nullable=False, default=0)
    anticipo = Column(Integer, nullable=False, default=0)
    fecha_ingreso = Column(Date, nullable=False, default=date.today, index=True)
    fecha_entrega = Column(String(50), nullable=True)
    estado = Column(String(50), nullable=False, default=EstadoReparacion.PENDIENTE.value, index=True)
    # Comma separated "materiales usados", e.g. "yeso 1/2 kg, pincel 2".
    notas = Column(Text, nullable=True)
    imagen_url = Column(String(500), nullable=True)
    recibo_url = Column(String(500), nullable=True, default="")
    creado_por = Column(String(100), nullable=False, default="Sistema")
    activo = Column(Boolean, nullable=False, default=True, index=True)
    fecha_registro = Column(DateTime, nullable=False, default=_utcnow, index=True)

    @property
    def saldo_pendiente(self) -> int:
        if self.costo_total is None:
            return 0
        return max(0, self.costo_total - (self.anticipo or 0))

    def __repr__(self) -> str:
        return f"<Reparacion id={self.id} cliente={self.nombre_cliente} estado={self.estado}>"


class HistorialReparacion(Base):
    __tablename__ = "HistorialReparacion"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    reparacion_id = Column(Integer, ForeignKey("reparacion.id"), nullable=False, index=True)
    fecha = Column(Date, nullable=False, default=date.today)
    estado = Column(String(50), nullable=False)
    notas = Column(Text, nullable=True)
    usuario_id = Column(String(50), nullable=True)
    fecha_registro = Column(DateTime, nullable=False, default=_utcnow)


class MaterialUtilizado(Base):
    __tablename__ = "materialutilizado"
    __table_args__ = (
        Index("ix_materialutilizado_documento", "tipo_documento", "documento_id"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    tipo_documento = Column(
        SAEnum(
            TipoDocumento,
            name="tipo_documento_enum",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    documento_id = Column(Integer, nullable=False)
    materia_id = Column(Integer, ForeignKey("materiaprima.id"), nullable=False, index=True)
    cantidad = Column(Integer, nullable=False)
    costo_unitario = Column(Integer, nullable=False, default=0)
    fecha = Column(Date, nullable=False, default=date.today)
    usuario_id = Column(String(50), nullable=True)
    fecha_registro = Column(DateTime, nullable=False, default=_utcnow)

    @property
    def costo(self) -> int:
        return (self.cantidad or 0) * (self.costo_unitario or 0)
