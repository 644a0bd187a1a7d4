from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi import HTTPException
from sqlalchemy import text

from inventario.apps.pedidos import models, router, schemas, services
from inventario.apps.productos import models as producto_models
from inventario.apps.ventas import models as venta_models


def _producto(db_session) -> producto_models.Producto:
    producto = producto_models.Producto(modelo="San Judas", color="Verde", precio=500, stock=2, creado_por="admin")
    db_session.add(producto)
    db_session.commit()
    return producto


def _payload(**overrides) -> schemas.PedidoCreate:
    data = {
        "clienteNombre": "Maria Lopez",
        "clienteContacto": "555-1234",
        "total": "900",
        "productos": [
            {"productoId": 1, "productoNombre": "San Judas Tadeo de 60 centimetros con base", "cantidad": 1, "precioUnitario": "500"},
            {"productoNombre": "Angel", "cantidad": 2, "precioUnitario": "200"},
        ],
    }
    data.update(overrides)
    return schemas.PedidoCreate(**data)


def test_summary_for_single_and_multiple_products():
    assert services.build_summary(["Virgen"]) == "Virgen"
    assert services.build_summary(["San Judas Tadeo de 60 centimetros con base", "Angel", "Cruz"]) == (
        "San Judas Tadeo de 60 centimet... (+2 items)"
    )


def test_create_order_derives_totals_and_defaults(db_session):
    body = router.create_order(_payload(), db=db_session)

    data = body["data"]
    assert body["message"] == "Pedido creado exitosamente"
    assert data["etapa"] == "Pendiente por realizar"
    assert data["creadoPor"] == "admin"
    assert data["totalCantidad"] == 3
    assert data["resumenProducto"].endswith("... (+1 items)")
    assert [p["subtotal"] for p in data["productos"]] == [Decimal("500"), Decimal("400")]
    assert data["productos"][0]["pedidoId"] == data["id"]


@pytest.mark.parametrize(
    "overrides, detail",
    [
        ({"clienteNombre": " "}, "El nombre del cliente es requerido"),
        ({"productos": []}, "Debe agregar al menos un producto al pedido"),
        ({"total": "0"}, "El total del pedido debe ser mayor a cero"),
    ],
)
def test_create_order_validation(db_session, overrides, detail):
    with pytest.raises(HTTPException) as exc:
        router.create_order(_payload(**overrides), db=db_session)
    assert exc.value.status_code == 400
    assert exc.value.detail == detail


def test_list_by_day_validates_and_filters(db_session, monkeypatch):
    monkeypatch.setattr(services, "LOCAL_TZ", timezone.utc)
    created = router.create_order(_payload(), db=db_session)
    old = models.Pedido(cliente_nombre="Viejo", total=Decimal("10"), fecha_creacion=datetime(2020, 1, 5, 10, 0))
    db_session.add(old)
    db_session.commit()

    with pytest.raises(HTTPException) as missing:
        router.list_orders_for_day(fecha=None, db=db_session)
    assert missing.value.detail == "El parámetro 'fecha' es requerido. Ejemplo: ?fecha=2025-11-23"

    with pytest.raises(HTTPException) as invalid:
        router.list_orders_for_day(fecha="05/01/2020", db=db_session)
    assert invalid.value.detail == "Formato de fecha inválido. Use YYYY-MM-DD"

    body = router.list_orders_for_day(fecha="2020-01-05", db=db_session)
    assert body["total"] == 1
    assert body["fecha"] == "2020-01-05"
    assert body["message"] == "1 pedidos encontrados para la fecha 2020-01-05"
    assert body["data"][0]["clienteNombre"] == "Viejo"

    assert router.list_orders(db=db_session)["data"][0]["id"] == created["data"]["id"]


def test_finishing_order_books_sale_and_records_stage(db_session):
    producto = _producto(db_session)
    created = router.create_order(_payload(), db=db_session)
    order_id = created["data"]["id"]

    body = router.update_stage(order_id, schemas.EtapaUpdate(etapa="Finalizado", notas="listo"), db=db_session)

    assert body["data"]["etapa"] == "Finalizado"
    etapas = db_session.query(models.PedidoEtapa).filter_by(pedido_id=order_id).all()
    assert [(e.etapa, e.usuario) for e in etapas] == [("Finalizado", "sistema")]

    venta = db_session.query(venta_models.Venta).one()
    assert venta.producto_id == producto.id
    assert venta.tipo == "pedido"
    assert venta.usuario_registro == "Sistema"
    assert venta.cliente_id == 1
    assert venta.precio_total == 500
    assert venta.fecha == date.today()


def test_stage_change_requires_value_and_existing_order(db_session):
    with pytest.raises(HTTPException) as blank:
        router.update_stage(1, schemas.EtapaUpdate(etapa=""), db=db_session)
    assert blank.value.detail == "La nueva etapa es requerida"

    with pytest.raises(HTTPException) as missing:
        router.update_stage(99, schemas.EtapaUpdate(etapa="En proceso"), db=db_session)
    assert missing.value.status_code == 404
    assert missing.value.detail == "Pedido no encontrado con ID: 99"


def test_delete_removes_lines_and_history(db_session):
    created = router.create_order(_payload(), db=db_session)
    order_id = created["data"]["id"]
    router.update_stage(order_id, schemas.EtapaUpdate(etapa="En proceso"), db=db_session)

    router.delete_order(order_id, db=db_session)

    assert db_session.query(models.Pedido).count() == 0
    assert db_session.query(models.PedidoProducto).count() == 0
    assert db_session.query(models.PedidoEtapa).count() == 0


def test_day_filter_uses_local_calendar_day(db_session, monkeypatch):
    # UTC-6: an order placed at 20:00 local on the 5th is stored as 02:00 UTC on the 6th.
    monkeypatch.setattr(services, "LOCAL_TZ", timezone(timedelta(hours=-6)))
    evening = models.Pedido(cliente_nombre="Tarde", total=Decimal("10"), fecha_creacion=datetime(2020, 1, 6, 2, 0))
    next_day = models.Pedido(cliente_nombre="Manana", total=Decimal("10"), fecha_creacion=datetime(2020, 1, 6, 7, 0))
    db_session.add_all([evening, next_day])
    db_session.commit()

    assert services.utc_bounds_for_day(date(2020, 1, 5), services.LOCAL_TZ) == (
        datetime(2020, 1, 5, 6, 0),
        datetime(2020, 1, 6, 6, 0),
    )
    body = router.list_orders_for_day(fecha="2020-01-05", db=db_session)
    assert [p["clienteNombre"] for p in body["data"]] == ["Tarde"]
    body = router.list_orders_for_day(fecha="2020-01-06", db=db_session)
    assert [p["clienteNombre"] for p in body["data"]] == ["Manana"]


def test_finishing_order_with_unknown_product_keeps_stage(db_session):
    db_session.execute(text("PRAGMA foreign_keys=ON"))
    created = router.create_order(
        _payload(productos=[{"productoId": 999, "productoNombre": "Sin catalogo", "cantidad": 1, "precioUnitario": "900"}]),
        db=db_session,
    )
    order_id = created["data"]["id"]

    body = router.update_stage(order_id, schemas.EtapaUpdate(etapa="Finalizado"), db=db_session)

    assert body["data"]["etapa"] == "Finalizado"
    assert db_session.query(venta_models.Venta).count() == 0
    db_session.expire_all()
    assert db_session.get(models.Pedido, order_id).etapa == "Finalizado"
    assert db_session.query(models.PedidoEtapa).filter_by(pedido_id=order_id).count() == 1


def test_failed_sale_insert_is_rolled_back_alone(db_session, monkeypatch):
    db_session.execute(text("PRAGMA foreign_keys=ON"))
    _producto(db_session)
    created = router.create_order(_payload(), db=db_session)
    order_id = created["data"]["id"]
    record_sale = services.venta_services.record_sale

    def sale_for_missing_product(db, payload):
        # Product row vanished between the lookup and the insert.
        return record_sale(db, payload.model_copy(update={"producto_id": 999}))

    monkeypatch.setattr(services.venta_services, "record_sale", sale_for_missing_product)

    body = router.update_stage(order_id, schemas.EtapaUpdate(etapa="Finalizado"), db=db_session)

    assert body["data"]["etapa"] == "Finalizado"
    db_session.expire_all()
    assert db_session.get(models.Pedido, order_id).etapa == "Finalizado"
    assert db_session.query(venta_models.Venta).count() == 0
