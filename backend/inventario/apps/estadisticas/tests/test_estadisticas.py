from __future__ import annotations

from datetime import date

import pytest

from inventario.apps.estadisticas import router, services
from inventario.apps.materiales import models as material_models
from inventario.apps.productos import models as producto_models
from inventario.apps.reparaciones import models as repair_models
from inventario.apps.ventas import models as sale_models

# A Wednesday.
TODAY = date(2024, 6, 12)


@pytest.fixture()
def sales(db_session):
    producto = producto_models.Producto(modelo="San Miguel", color="Blanco", precio=100, stock=10, creado_por="admin")
    db_session.add(producto)
    db_session.flush()
    for cliente_id, fecha, total in [
        (1, date(2024, 6, 10), 500),
        (1, date(2024, 6, 9), 200),
        (2, date(2024, 6, 11), 100),
        (3, date(2024, 5, 1), 300),
        (3, date(2022, 1, 1), 50),
    ]:
        db_session.add(
            sale_models.Venta(
                cliente_id=cliente_id,
                producto_id=producto.id,
                cantidad=1,
                precio_unitario=total,
                precio_total=total,
                fecha=fecha,
                tipo="mostrador",
                usuario_registro="admin",
            )
        )
    db_session.commit()


@pytest.fixture()
def consumption(db_session):
    yeso = material_models.MateriaPrima(nombre="Yeso", cantidad=50, unidad="kg", stock_minimo=0, costo=10, categoria="Yesos")
    pintura = material_models.MateriaPrima(nombre="Pintura", cantidad=50, unidad="ml", stock_minimo=0, costo=5, categoria="Pinturas")
    db_session.add_all([yeso, pintura])
    db_session.flush()
    tipo = material_models.TipoMovimiento
    for materia, fecha, cantidad, kind in [
        (yeso, date(2024, 6, 3), 5, tipo.CONSUMO),
        (pintura, date(2024, 6, 4), 8, tipo.CONSUMO),
        (yeso, date(2024, 5, 20), 2, tipo.CONSUMO),
        (yeso, date(2024, 6, 5), 40, tipo.ENTRADA),
    ]:
        db_session.add(material_models.MovimientoMp(materia_id=materia.id, fecha=fecha, tipo=kind, cantidad=cantidad))
    db_session.commit()


def _repair(db_session, fecha: date, estado: str = "Pendiente", activo: bool = True) -> None:
    db_session.add(
        repair_models.Reparacion(
            nombre_cliente="Cliente",
            modelo="Cristo",
            costo_total=100,
            fecha_ingreso=fecha,
            estado=estado,
            activo=activo,
        )
    )
    db_session.commit()


def test_sales_daily_starts_on_sunday(db_session, sales):
    rows = services.sales_by_period(db_session, "diario", today=TODAY)
    assert rows == [
        {"periodo": "Domingo", "cantidad": 1, "monto": 200},
        {"periodo": "Lunes", "cantidad": 1, "monto": 500},
        {"periodo": "Martes", "cantidad": 1, "monto": 100},
    ]


def test_sales_weekly_and_yearly(db_session, sales):
    semanal = services.sales_by_period(db_session, "semanal", today=TODAY)
    assert [r["periodo"] for r in semanal] == ["Semana 18", "Semana 23", "Semana 24"]

    anual = services.sales_by_period(db_session, "anual", today=TODAY)
    assert anual == [
        {"periodo": "2022", "cantidad": 1, "monto": 50},
        {"periodo": "2024", "cantidad": 4, "monto": 1100},
    ]


@pytest.mark.parametrize("periodo", ["mensual", None, "quincenal"])
def test_sales_monthly_is_the_fallback(db_session, sales, periodo):
    assert services.sales_by_period(db_session, periodo, today=TODAY) == [
        {"periodo": "2024-05", "cantidad": 1, "monto": 300},
        {"periodo": "2024-06", "cantidad": 3, "monto": 800},
    ]


def test_repairs_by_month_skip_inactive(db_session):
    _repair(db_session, date(2024, 6, 1))
    _repair(db_session, date(2024, 6, 2))
    _repair(db_session, date(2024, 4, 2))
    _repair(db_session, date(2024, 6, 3), activo=False)

    rows = services.repairs_by_period(db_session, "mensual", today=TODAY)
    assert rows == [
        {"periodo": "2024-04", "cantidadReparaciones": 1, "tipoReparacion": "General"},
        {"periodo": "2024-06", "cantidadReparaciones": 2, "tipoReparacion": "General"},
    ]


def test_materials_only_count_consumption(db_session, consumption):
    rows = services.materials_by_period(db_session, "mensual", today=TODAY)
    assert rows == [
        {"periodo": "2024-05", "material": "Yeso", "cantidadConsumida": 2},
        {"periodo": "2024-06", "material": "Pintura", "cantidadConsumida": 8},
        {"periodo": "2024-06", "material": "Yeso", "cantidadConsumida": 5},
    ]


def test_dashboard(db_session, sales, consumption):
    _repair(db_session, date(2024, 6, 1))
    _repair(db_session, date(2024, 6, 2), estado="Completada")
    _repair(db_session, date(2024, 6, 3), activo=False)

    body = router.dashboard_stats(db=db_session)
    assert body["message"] == "Estadísticas obtenidas exitosamente"
    assert body["data"] == {
        "totalVentas": 1150,
        "totalReparaciones": 2,
        "pedidosPendientes": 1,
        "clientesActivos": 3,
        "materialesUtilizados": 15,
    }


def test_chart_envelope_reports_resolved_period(db_session):
    body = router.sales_chart(periodo="SEMANAL", db=db_session)
    assert body["periodo"] == "semanal"
    assert body["total"] == 0
    assert body["message"] == "Datos de ventas obtenidos exitosamente"

    assert router.materials_chart(periodo=None, db=db_session)["periodo"] == "mensual"
