from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi import HTTPException

from inventario.apps.materiales import models as material_models
from inventario.apps.recetas import models, router, schemas


def _materia(db_session) -> int:
    materia = material_models.MateriaPrima(
        nombre="Resina epoxica",
        cantidad=5,
        unidad="litro",
        stock_minimo=1,
        costo=300,
        categoria="Resinas",
        activo=True,
    )
    db_session.add(materia)
    db_session.commit()
    return materia.id


def _payload(**overrides) -> schemas.RecetaIn:
    data = {
        "productoId": None,
        "tiempoFabricacion": "3 dias",
        "instrucciones": "Vaciar el molde y dejar secar 24 horas",
        "herramientas": "Molde de silicon, espátula",
        "creadoPor": "admin001",
    }
    data.update(overrides)
    return schemas.RecetaIn(**data)


def test_create_with_materials(db_session):
    materia_id = _materia(db_session)
    body = router.create_recipe(
        _payload(
            materiales=[
                {"materiaId": materia_id, "cantidad": "0.75"},
                {"nombre": "Hoja de oro", "cantidad": 2, "unidad": "pieza"},
            ]
        ),
        db=db_session,
    )

    assert body["message"] == "Receta creada exitosamente"
    materiales = body["data"]["materiales"]
    assert [(m["nombre"], m["unidad"], m["cantidad"]) for m in materiales] == [
        ("Resina epoxica", "litro", Decimal("0.75")),
        ("Hoja de oro", "pieza", Decimal("2")),
    ]


@pytest.mark.parametrize(
    "overrides, detail",
    [
        ({"tiempoFabricacion": " "}, "El tiempo de fabricación es requerido"),
        ({"instrucciones": None}, "Las instrucciones son requeridas"),
        ({"materiales": [{"nombre": "Yeso", "cantidad": 0}]}, "La cantidad de cada material debe ser mayor a cero"),
        ({"materiales": [{"cantidad": 1}]}, "Cada material requiere materiaId o nombre"),
    ],
)
def test_create_validation(db_session, overrides, detail):
    with pytest.raises(HTTPException) as exc:
        router.create_recipe(_payload(**overrides), db=db_session)
    assert exc.value.status_code == 400
    assert exc.value.detail == detail


def test_worker_listing_is_tagged(db_session):
    router.create_recipe(_payload(), db=db_session)

    assert router.list_recipes(db=db_session)["total"] == 1
    worker = router.list_recipes_for_worker(db=db_session)
    assert worker["rol"] == "TRABAJADOR"
    assert worker["total"] == 1


def test_update_replaces_materials_only_when_sent(db_session):
    recipe_id = router.create_recipe(
        _payload(materiales=[{"nombre": "Yeso", "cantidad": 1, "unidad": "kg"}]), db=db_session
    )["data"]["id"]

    kept = router.update_recipe(recipe_id, _payload(notas="Lijar antes de pintar"), db=db_session)
    assert kept["data"]["notas"] == "Lijar antes de pintar"
    assert len(kept["data"]["materiales"]) == 1

    cleared = router.update_recipe(recipe_id, _payload(materiales=[]), db=db_session)
    assert cleared["data"]["materiales"] == []
    assert db_session.query(models.RecetaMaterial).count() == 0


def test_missing_recipe(db_session):
    with pytest.raises(HTTPException) as exc:
        router.get_recipe(42, db=db_session)
    assert exc.value.status_code == 404
    assert exc.value.detail == "Receta no encontrada con ID: 42"

    with pytest.raises(HTTPException):
        router.update_recipe(42, _payload(), db=db_session)


def test_delete_removes_materials(db_session):
    recipe_id = router.create_recipe(
        _payload(materiales=[{"nombre": "Yeso", "cantidad": 1}]), db=db_session
    )["data"]["id"]

    assert router.delete_recipe(recipe_id, db=db_session)["message"] == "Receta eliminada exitosamente"
    assert db_session.query(models.Receta).count() == 0
    assert db_session.query(models.RecetaMaterial).count() == 0
