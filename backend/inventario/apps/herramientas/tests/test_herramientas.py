from __future__ import annotations

import pytest
from fastapi import HTTPException

from inventario.apps.herramientas import models, router, schemas


def _create(db_session, nombre="Espatula", cantidad=2) -> dict:
    return router.create_tool(
        schemas.HerramientaCreate(nombre=nombre, descripcion="acero", cantidadTotal=cantidad, creadoPor="admin"),
        db=db_session,
    )


def test_create_starts_fully_available(db_session):
    body = _create(db_session)

    assert body["message"] == "Herramienta creada exitosamente"
    assert body["data"]["cantidadTotal"] == 2
    assert body["data"]["cantidadDisponible"] == 2
    assert body["data"]["estatus"] == "Disponible"


@pytest.mark.parametrize(
    "payload, detail",
    [
        ({"nombre": "", "cantidadTotal": 1}, "Error al crear herramienta: El nombre de la herramienta es requerido"),
        ({"nombre": "Lija", "cantidadTotal": 0}, "Error al crear herramienta: La cantidad debe ser mayor a cero"),
    ],
)
def test_create_validation(db_session, payload, detail):
    with pytest.raises(HTTPException) as exc:
        router.create_tool(schemas.HerramientaCreate(**payload), db=db_session)
    assert exc.value.status_code == 400
    assert exc.value.detail == detail


def test_lookup_by_id_or_name(db_session):
    created = _create(db_session)
    tool_id = created["data"]["id"]

    assert router.get_tool(str(tool_id), db=db_session)["data"]["nombre"] == "Espatula"
    assert router.get_tool("Espatula", db=db_session)["data"]["id"] == tool_id

    with pytest.raises(HTTPException) as exc:
        router.get_tool("Martillo", db=db_session)
    assert exc.value.status_code == 404
    assert exc.value.detail == "Herramienta no encontrada: Martillo"


def test_lend_and_return_keep_available_in_range(db_session):
    _create(db_session, cantidad=1)

    router.lend_tool("Espatula", schemas.Asignacion(usuarioAsignado="trab001", asignadoPor="admin"), db=db_session)
    tool = db_session.query(models.Herramienta).one()
    assert tool.cantidad_disponible == 0
    assert tool.estatus == "En Uso"
    assert tool.usuario_asignado == "trab001"
    assert tool.fecha_asignacion is not None

    with pytest.raises(HTTPException) as empty:
        router.lend_tool("Espatula", schemas.Asignacion(usuarioAsignado="trab002"), db=db_session)
    assert empty.value.detail == "No hay stock disponible para asignar"

    router.return_tool("Espatula", db=db_session)
    assert tool.cantidad_disponible == 1
    assert tool.estatus == "Disponible"
    assert tool.usuario_asignado is None

    with pytest.raises(HTTPException) as full:
        router.return_tool("Espatula", db=db_session)
    assert full.value.detail == "No hay unidades prestadas para devolver"


def test_lend_requires_user(db_session):
    _create(db_session)
    with pytest.raises(HTTPException) as exc:
        router.lend_tool("Espatula", schemas.Asignacion(usuarioAsignado=" "), db=db_session)
    assert exc.value.detail == "El usuario asignado es requerido"


def test_stock_update_validation_and_reset(db_session):
    _create(db_session, cantidad=3)
    router.lend_tool("Espatula", schemas.Asignacion(usuarioAsignado="trab001"), db=db_session)

    with pytest.raises(HTTPException) as missing:
        router.update_stock("Espatula", schemas.StockUpdate(), db=db_session)
    assert missing.value.detail == "La cantidad es requerida"

    with pytest.raises(HTTPException) as negative:
        router.update_stock("Espatula", schemas.StockUpdate(cantidad=-1), db=db_session)
    assert negative.value.detail == "La cantidad debe ser un número positivo"

    router.update_stock("Espatula", schemas.StockUpdate(cantidad=5), db=db_session)
    tool = db_session.query(models.Herramienta).one()
    assert (tool.cantidad_total, tool.cantidad_disponible) == (5, 5)


def test_list_filters_and_soft_delete(db_session):
    _create(db_session, nombre="Brocha")
    _create(db_session, nombre="Alicate")
    router.lend_tool("Brocha", schemas.Asignacion(usuarioAsignado="trab001"), db=db_session)

    listed = router.list_tools(buscar=None, estatus=None, db=db_session)
    assert [t["nombre"] for t in listed["data"]] == ["Alicate", "Brocha"]
    assert router.list_tools(buscar="roch", estatus=None, db=db_session)["total"] == 1
    assert router.list_tools(buscar=None, estatus="En Uso", db=db_session)["data"][0]["nombre"] == "Brocha"

    router.delete_tool("Alicate", db=db_session)
    assert router.list_tools(buscar=None, estatus=None, db=db_session)["total"] == 1
