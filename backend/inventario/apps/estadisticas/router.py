from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from inventario.database import get_read_db
from inventario.utils.responses import envelope
from . import services

router = APIRouter(tags=["estadisticas"])


@router.get("/dashboard/stats")
def dashboard_stats(db: Session = Depends(get_read_db)):
    return envelope("Estadísticas obtenidas exitosamente", data=services.dashboard_stats(db))


def _chart(rows: list, periodo: Optional[str], message: str) -> dict:
    return envelope(
        message,
        data=rows,
        periodo=services.resolve_period(periodo).name,
        total=len(rows),
    )


@router.get("/analytics/venta")
def sales_chart(periodo: Optional[str] = Query(None), db: Session = Depends(get_read_db)):
    rows = services.sales_by_period(db, periodo)
    return _chart(rows, periodo, "Datos de ventas obtenidos exitosamente")


@router.get("/analytics/reparaciones")
def repairs_chart(periodo: Optional[str] = Query(None), db: Session = Depends(get_read_db)):
    rows = services.repairs_by_period(db, periodo)
    return _chart(rows, periodo, "Datos de reparaciones obtenidos exitosamente")


@router.get("/analytics/materiales")
def materials_chart(periodo: Optional[str] = Query(None), db: Session = Depends(get_read_db)):
    rows = services.materials_by_period(db, periodo)
    return _chart(rows, periodo, "Datos de materiales obtenidos exitosamente")
