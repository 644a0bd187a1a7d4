from __future__ import annotations

from datetime import date

import pytest
from fastapi import HTTPException

from inventario.apps.tareas import models, router, schemas


def _payload(**overrides) -> schemas.TareaIn:
    data = {
        "asunto": "Pintar virgenes",
        "detalles": "Acabado dorado en el manto",
        "fechaAsignacion": "2024-05-01",
        "fechaEntrega": "2024-05-10",
        "cantidadFiguras": 12,
        "creadoPor": "admin001",
        "trabajadorId": "trab001",
    }
    data.update(overrides)
    return schemas.TareaIn(**data)


def _create(db_session, **overrides) -> int:
    return router.create_task(_payload(**overrides), db=db_session)["data"]["id"]


def test_create_defaults_to_pending(db_session):
    body = router.create_task(_payload(), db=db_session)

    assert body["message"] == "Tarea creada exitosamente"
    assert body["data"]["estado"] == models.ESTADO_PENDIENTE
    assert body["data"]["activo"] is True
    assert body["data"]["fechaEntrega"] == date(2024, 5, 10)


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"asunto": ""}, "El asunto de la tarea es requerido"),
        ({"detalles": None}, "Los detalles de la tarea son requeridos"),
        ({"fechaAsignacion": None}, "La fecha de asignación es requerida"),
        ({"fechaEntrega": None}, "La fecha de entrega es requerida"),
        ({"fechaEntrega": "2024-04-30"}, "La fecha de entrega no puede ser anterior a la fecha de asignación"),
        ({"cantidadFiguras": -1}, "La cantidad de figuras debe ser un número positivo"),
        ({"creadoPor": " "}, "El creador de la tarea es requerido"),
        ({"trabajadorId": None}, "El ID del trabajador es requerido"),
    ],
)
def test_create_validation(db_session, overrides, reason):
    with pytest.raises(HTTPException) as exc:
        router.create_task(_payload(**overrides), db=db_session)
    assert exc.value.status_code == 400
    assert exc.value.detail == f"Error al crear tarea: {reason}"


def test_same_day_delivery_is_allowed(db_session):
    assert _create(db_session, fechaEntrega="2024-05-01")


def test_filters(db_session):
    _create(db_session)
    other = _create(db_session, asunto="Reparar molde", detalles="Molde de san judas", trabajadorId="trab002")
    router.change_state(other, schemas.EstadoUpdate(estado="en_proceso"), db=db_session)

    assert router.list_tasks(buscar="molde", estado=None, db=db_session)["total"] == 1
    assert router.list_tasks(buscar=None, estado="EN_PROCESO", db=db_session)["total"] == 1
    assert router.list_tasks(buscar=None, estado="TODAS", db=db_session)["total"] == 2

    worker = router.list_tasks_for_worker("trab001", estado=None, db=db_session)
    assert [t["asunto"] for t in worker["data"]] == ["Pintar virgenes"]
    assert router.list_tasks_for_worker("trab002", estado="PENDIENTE", db=db_session)["total"] == 0


def test_state_change(db_session):
    task_id = _create(db_session)

    body = router.change_state(task_id, schemas.EstadoUpdate(estado="completada"), db=db_session)
    assert body["nuevoEstado"] == "COMPLETADA"

    with pytest.raises(HTTPException) as missing:
        router.change_state(task_id, schemas.EstadoUpdate(estado=" "), db=db_session)
    assert missing.value.detail == "El estado es requerido"

    with pytest.raises(HTTPException) as invalid:
        router.change_state(task_id, schemas.EstadoUpdate(estado="CANCELADA"), db=db_session)
    assert invalid.value.detail == "Estado inválido. Debe ser: PENDIENTE, EN_PROCESO o COMPLETADA"


def test_update_keeps_state(db_session):
    task_id = _create(db_session)
    router.change_state(task_id, schemas.EstadoUpdate(estado="EN_PROCESO"), db=db_session)

    body = router.update_task(task_id, _payload(cantidadFiguras=20, estado="PENDIENTE"), db=db_session)
    assert body["data"]["cantidadFiguras"] == 20
    assert body["data"]["estado"] == "EN_PROCESO"


def test_soft_delete(db_session):
    task_id = _create(db_session)
    router.delete_task(task_id, db=db_session)

    assert db_session.get(models.Tarea, task_id).activo is False
    with pytest.raises(HTTPException) as exc:
        router.get_task(task_id, db=db_session)
    assert exc.value.status_code == 404
    assert exc.value.detail == f"Tarea no encontrada ID: {task_id}"
