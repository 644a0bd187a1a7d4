from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from inventario.database import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


class Venta(Base):
    __tablename__ = "venta"
    __table_args__ = (
        Index("ix_venta_duplicate_check", "cliente_id", "producto_id", "fecha", "tipo"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cliente_id = Column(Integer, nullable=False, index=True)
    producto_id = Column(Integer, ForeignKey("producto.id"), nullable=False, index=True)
    cantidad = Column(Integer, nullable=False)
    precio_unitario = Column(Integer, nullable=False)
    # Always cantidad * precio_unitario; set by the service, never by clients.
    precio_total = Column(Integer, nullable=False)
    fecha = Column(Date, nullable=False, index=True)
    tipo = Column(String(50), nullable=False)
    usuario_registro = Column(String(100), nullable=False)
    fecha_registro = Column(DateTime, nullable=False, default=_utcnow, index=True)

    producto = relationship("Producto", lazy="joined")

    @property
    def producto_modelo(self):
        return self.producto.modelo if self.producto is not None else None

    def __repr__(self) -> str:
        return f"<Venta id={self.id} producto_id={self.producto_id} total={self.precio_total}>"
