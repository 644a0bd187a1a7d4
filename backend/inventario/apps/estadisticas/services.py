from __future__ import annotations

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from inventario.apps.materiales import models as material_models
from inventario.apps.reparaciones import models as repair_models
from inventario.apps.ventas import models as sale_models

DEFAULT_PERIOD = "mensual"

# date.isoweekday(): Monday=1 .. Sunday=7
WEEKDAY_NAMES = {
    1: "Lunes",
    2: "Martes",
    3: "Miércoles",
    4: "Jueves",
    5: "Viernes",
    6: "Sábado",
    7: "Domingo",
}

# Repairs in this state are not counted as pending on the dashboard.
REPAIR_DONE_STATE = "Completada"


def _months_ago(today: date, months: int) -> date:
    year, month = divmod(today.year * 12 + today.month - 1 - months, 12)
    month += 1
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


@dataclass(frozen=True)
class Period:
    """
    How a chart groups dates.

    `sort_key` orders the buckets (Sunday first for the daily chart, then
    chronologically); `label` is what the client shows.
    """

    name: str
    since: Callable[[date], date]
    sort_key: Callable[[date], Tuple]
    label: Callable[[date], str]


PERIODS: Dict[str, Period] = {
    "diario": Period(
        "diario",
        since=lambda today: today - timedelta(days=7),
        sort_key=lambda d: (d.isoweekday() % 7,),
        label=lambda d: WEEKDAY_NAMES[d.isoweekday()],
    ),
    "semanal": Period(
        "semanal",
        since=lambda today: today - timedelta(weeks=8),
        sort_key=lambda d: tuple(d.isocalendar()[:2]),
        label=lambda d: f"Semana {d.isocalendar()[1]}",
    ),
    "mensual": Period(
        "mensual",
        since=lambda today: _months_ago(today, 12),
        sort_key=lambda d: (d.year, d.month),
        label=lambda d: f"{d.year:04d}-{d.month:02d}",
    ),
    "anual": Period(
        "anual",
        since=lambda today: _months_ago(today, 36),
        sort_key=lambda d: (d.year,),
        label=lambda d: f"{d.year:04d}",
    ),
}


def resolve_period(periodo: Optional[str]) -> Period:
    """Unknown or missing values fall back to the monthly chart."""
    return PERIODS.get((periodo or "").strip().lower(), PERIODS[DEFAULT_PERIOD])


# ---------------------------------------------------------------------------
# DASHBOARD
# ---------------------------------------------------------------------------


def dashboard_stats(db: Session) -> dict:
    total_ventas = db.query(func.coalesce(func.sum(sale_models.Venta.precio_total), 0)).scalar()
    active_repairs = db.query(func.count(repair_models.Reparacion.id)).filter(
        repair_models.Reparacion.activo.is_(True)
    )
    total_reparaciones = active_repairs.scalar()
    pendientes = active_repairs.filter(repair_models.Reparacion.estado != REPAIR_DONE_STATE).scalar()
    clientes = db.query(func.count(func.distinct(sale_models.Venta.cliente_id))).scalar()
    consumido = (
        db.query(func.coalesce(func.sum(material_models.MovimientoMp.cantidad), 0))
        .filter(material_models.MovimientoMp.tipo == material_models.TipoMovimiento.CONSUMO)
        .scalar()
    )
    return {
        "totalVentas": int(total_ventas or 0),
        "totalReparaciones": int(total_reparaciones or 0),
        "pedidosPendientes": int(pendientes or 0),
        "clientesActivos": int(clientes or 0),
        "materialesUtilizados": int(consumido or 0),
    }


# ---------------------------------------------------------------------------
# CHARTS
# ---------------------------------------------------------------------------


def sales_by_period(db: Session, periodo: Optional[str], *, today: Optional[date] = None) -> List[dict]:
    period = resolve_period(periodo)
    since = period.since(today or date.today())
    ventas = db.query(sale_models.Venta).filter(sale_models.Venta.fecha >= since).all()

    counts: Dict[Tuple, int] = defaultdict(int)
    amounts: Dict[Tuple, int] = defaultdict(int)
    labels: Dict[Tuple, str] = {}
    for venta in ventas:
        key = period.sort_key(venta.fecha)
        counts[key] += 1
        amounts[key] += venta.precio_total or 0
        labels[key] = period.label(venta.fecha)

    return [
        {"periodo": labels[key], "cantidad": counts[key], "monto": amounts[key]}
        for key in sorted(counts)
    ]


def repairs_by_period(db: Session, periodo: Optional[str], *, today: Optional[date] = None) -> List[dict]:
    period = resolve_period(periodo)
    since = period.since(today or date.today())
    fechas = [
        row.fecha_ingreso
        for row in db.query(repair_models.Reparacion.fecha_ingreso).filter(
            repair_models.Reparacion.activo.is_(True),
            repair_models.Reparacion.fecha_ingreso >= since,
        )
    ]

    counts: Dict[Tuple, int] = defaultdict(int)
    labels: Dict[Tuple, str] = {}
    for fecha in fechas:
        key = period.sort_key(fecha)
        counts[key] += 1
        labels[key] = period.label(fecha)

    return [
        {"periodo": labels[key], "cantidadReparaciones": counts[key], "tipoReparacion": "General"}
        for key in sorted(counts)
    ]


def materials_by_period(db: Session, periodo: Optional[str], *, today: Optional[date] = None) -> List[dict]:
    """Consumed quantity per material and period, biggest consumers first within a period."""
    period = resolve_period(periodo)
    since = period.since(today or date.today())
    movimiento, materia = material_models.MovimientoMp, material_models.MateriaPrima
    rows = (
        db.query(movimiento.fecha, movimiento.cantidad, materia.nombre)
        .join(materia, movimiento.materia_id == materia.id)
        .filter(
            movimiento.tipo == material_models.TipoMovimiento.CONSUMO,
            movimiento.fecha >= since,
        )
        .all()
    )

    totals: Dict[Tuple, int] = defaultdict(int)
    labels: Dict[Tuple, str] = {}
    for fecha, cantidad, nombre in rows:
        key = period.sort_key(fecha)
        totals[(key, nombre)] += cantidad or 0
        labels[key] = period.label(fecha)

    ordered = sorted(totals.items(), key=lambda item: (item[0][0], -item[1], item[0][1]))
    return [
        {"periodo": labels[key], "material": nombre, "cantidadConsumida": cantidad}
        for (key, nombre), cantidad in ordered
    ]
