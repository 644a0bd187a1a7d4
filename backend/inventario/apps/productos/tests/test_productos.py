from __future__ import annotations

import io

import pytest
from fastapi import HTTPException
from starlette.datastructures import UploadFile

from inventario.apps.productos import media, models, router, schemas, services


def _create(db_session, **overrides) -> dict:
    data = {"modelo": "Virgen de Guadalupe", "color": "Blanco", "precio": 350, "stock": 4, "creadoPor": "admin"}
    data.update(overrides)
    return router.create_product(schemas.ProductoCreate(**data), db=db_session)


def test_create_applies_catalogue_defaults(db_session):
    body = _create(db_session)

    producto = body["producto"]
    assert body["message"] == "Producto creado exitosamente"
    assert producto["tamaño"] == "200x300"
    assert producto["imagenUrl"] == ""
    assert producto["tipo"] == "religiosas"
    assert producto["creadoPor"] == "admin"
    assert producto["activo"] is True


def test_create_requires_core_fields(db_session):
    with pytest.raises(HTTPException) as exc:
        router.create_product(schemas.ProductoCreate(modelo="X", color="Rojo", precio=10), db=db_session)
    assert exc.value.status_code == 400
    assert exc.value.detail == "Modelo, color, precio, stock y creadoPor son requeridos"


def test_filter_by_type_requires_tipo_and_matches_exactly(db_session):
    _create(db_session)
    _create(db_session, modelo="Buda", tipo="orientales")

    with pytest.raises(HTTPException) as exc:
        router.filter_products(tipo=" ", db=db_session)
    assert exc.value.detail == "El parámetro 'tipo' es requerido"

    body = router.filter_products(tipo="orientales", db=db_session)
    assert body["total"] == 1
    assert body["productos"][0]["modelo"] == "Buda"
    assert "creadoPor" not in body["productos"][0]


def test_update_is_partial(db_session):
    created = _create(db_session)
    product_id = created["producto"]["id"]

    body = router.update_product(
        product_id, schemas.ProductoUpdate(**{"precio": 400, "tamaño": "300x400"}), db=db_session
    )

    assert body["producto"]["precio"] == 400
    assert body["producto"]["tamaño"] == "300x400"
    assert body["producto"]["color"] == "Blanco"


def test_delete_hides_product(db_session):
    created = _create(db_session)
    product_id = created["producto"]["id"]

    body = router.delete_product(product_id, db=db_session)
    assert body["producto"] == "Virgen de Guadalupe"

    assert router.list_products(db=db_session)["total"] == 0
    with pytest.raises(HTTPException) as exc:
        router.get_product(product_id, db=db_session)
    assert exc.value.status_code == 404
    assert db_session.get(models.Producto, product_id).activo is False


def test_publish_prices_message():
    assert router.publish_prices()["message"] == "Precios publicados exitosamente en el catálogo"


def test_upload_requires_file():
    with pytest.raises(HTTPException) as exc:
        router.upload_image(imagen=None)
    assert exc.value.detail == "No se proporcionó ninguna imagen"


def test_upload_returns_cloudinary_url(monkeypatch):
    captured = {}

    def fake_upload(file_bytes, filename):
        captured["bytes"] = file_bytes
        captured["filename"] = filename
        return "https://res.cloudinary.com/demo/image/upload/santo.png"

    monkeypatch.setattr(media, "upload_image", fake_upload)

    upload = UploadFile(file=io.BytesIO(b"png-bytes"), filename="santo.png")
    body = router.upload_image(imagen=upload)

    assert body["imageUrl"].endswith("santo.png")
    assert captured == {"bytes": b"png-bytes", "filename": "santo.png"}


def test_upload_without_credentials_is_503(monkeypatch):
    for name in ("CLOUDINARY_URL", "CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(HTTPException) as exc:
        services.upload_product_image(b"x", "a.png")
    assert exc.value.status_code == 503


def test_upload_failure_is_502(monkeypatch):
    monkeypatch.delenv("CLOUDINARY_URL", raising=False)
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setenv("CLOUDINARY_API_KEY", "key")
    monkeypatch.setenv("CLOUDINARY_API_SECRET", "secret")
    monkeypatch.setenv("CLOUDINARY_UPLOAD_RETRIES", "0")

    def boom(*args, **kwargs):
        raise RuntimeError("network down")

    monkeypatch.setattr(media.cloudinary.uploader, "upload", boom)

    with pytest.raises(HTTPException) as exc:
        services.upload_product_image(b"x", "a.png")
    assert exc.value.status_code == 502


def test_public_id_uses_timestamp_prefix(monkeypatch):
    monkeypatch.setattr(media, "epoch_millis", lambda: 1700000000000)
    assert media.public_id_for("foto.jpg") == "alma_jesus/1700000000000_foto.jpg"


def test_malformed_retry_setting_falls_back_to_one_retry(monkeypatch):
    monkeypatch.delenv("CLOUDINARY_URL", raising=False)
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setenv("CLOUDINARY_API_KEY", "key")
    monkeypatch.setenv("CLOUDINARY_API_SECRET", "secret")
    monkeypatch.setenv("CLOUDINARY_UPLOAD_RETRIES", "dos")
    monkeypatch.setattr(media.time, "sleep", lambda seconds: None)
    calls = []

    def flaky(*args, **kwargs):
        calls.append(kwargs["public_id"])
        if len(calls) == 1:
            raise RuntimeError("timeout")
        return {"secure_url": "https://res.cloudinary.com/demo/a.png"}

    monkeypatch.setattr(media.cloudinary.uploader, "upload", flaky)

    assert media.upload_image(b"x", "a.png") == "https://res.cloudinary.com/demo/a.png"
    assert len(calls) == 2
