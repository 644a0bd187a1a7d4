from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from inventario.database import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


ETAPA_INICIAL = "Pendiente por realizar"
ETAPA_FINALIZADO = "Finalizado"


class Pedido(Base):
    __tablename__ = "pedidos"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    cliente_nombre = Column(String(200), nullable=False)
    cliente_contacto = Column(String(200), nullable=True)
    # Free text as typed by the counter staff, usually YYYY-MM-DD.
    fecha_entrega = Column(String(50), nullable=True)
    notas = Column(Text, nullable=True)
    etapa = Column(String(100), nullable=False, default=ETAPA_INICIAL)
    total = Column(Numeric(10, 2), nullable=False)
    anticipo = Column(Numeric(10, 2), nullable=True)
    total_cantidad = Column(Integer, nullable=False, default=0)
    resumen_producto = Column(String(255), nullable=True)
    creado_por = Column(String(100), nullable=False, default="admin")
    fecha_creacion = Column(DateTime, nullable=False, default=_utcnow, index=True)
    fecha_actualizacion = Column(DateTime, nullable=True, default=_utcnow, onupdate=_utcnow)

    productos = relationship(
        "PedidoProducto",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="PedidoProducto.id",
    )
    etapas = relationship(
        "PedidoEtapa",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="PedidoEtapa.id",
    )

    def __repr__(self) -> str:
        return f"<Pedido id={self.id} cliente={self.cliente_nombre} etapa={self.etapa}>"


class PedidoProducto(Base):
    __tablename__ = "pedido_productos"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=False, index=True)
    producto_id = Column(Integer, nullable=True, index=True)
    producto_nombre = Column(String(255), nullable=False, index=True)
    cantidad = Column(Integer, nullable=False)
    precio_unitario = Column(Numeric(10, 2), nullable=True)
    subtotal = Column(Numeric(10, 2), nullable=True)

    pedido = relationship("Pedido", back_populates="productos")


class PedidoEtapa(Base):
    __tablename__ = "pedido_etapas"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=False, index=True)
    etapa = Column(String(100), nullable=False)
    notas = Column(Text, nullable=True)
    usuario = Column(String(100), nullable=False, default="sistema")
    fecha = Column(DateTime, nullable=False, default=_utcnow)

    pedido = relationship("Pedido", back_populates="etapas")
