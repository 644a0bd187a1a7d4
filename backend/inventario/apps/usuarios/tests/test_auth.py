from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi import HTTPException

from inventario import security
from inventario.apps.usuarios import models, router_public, schemas, services


def _create_user(db_session, *, user_id="admin001", username="admin", password="secret", rol="ADMIN", activo=True):
    user = models.Usuario(
        id=user_id,
        username=username,
        password=security.get_password_hash(password),
        rol=rol,
        email=f"{username}@example.com",
        activo=activo,
    )
    db_session.add(user)
    db_session.commit()
    return user


def test_login_returns_token_and_public_user(db_session):
    _create_user(db_session)

    body = router_public.login(schemas.LoginRequest(username="admin", password="secret"), db=db_session)

    assert body["success"] is True
    assert body["message"] == "Login exitoso"
    assert body["usuario"] == {
        "id": "admin001",
        "username": "admin",
        "rol": "ADMIN",
        "email": "admin@example.com",
    }
    claims = security.decode_access_token(body["token"])
    assert claims == {"username": "admin", "rol": "ADMIN"}


def test_login_requires_both_fields(db_session):
    with pytest.raises(HTTPException) as exc:
        router_public.login(schemas.LoginRequest(username="admin"), db=db_session)
    assert exc.value.status_code == 400
    assert exc.value.detail == "Username y password son requeridos"


def test_login_distinguishes_unknown_user_and_wrong_password(db_session):
    _create_user(db_session)

    with pytest.raises(HTTPException) as unknown:
        router_public.login(schemas.LoginRequest(username="nadie", password="x"), db=db_session)
    assert unknown.value.status_code == 401
    assert unknown.value.detail == "Usuario no encontrado"

    with pytest.raises(HTTPException) as wrong:
        router_public.login(schemas.LoginRequest(username="admin", password="bad"), db=db_session)
    assert wrong.value.status_code == 401
    assert wrong.value.detail == "Contraseña incorrecta"


def test_inactive_user_cannot_login(db_session):
    _create_user(db_session, activo=False)

    with pytest.raises(services.AuthenticationError):
        services.authenticate_user(db_session, username="admin", password="secret")


def test_legacy_bcrypt_hash_still_verifies():
    import bcrypt

    legacy = bcrypt.hashpw(b"secret", bcrypt.gensalt(rounds=4)).decode("utf-8")
    assert security.verify_password("secret", legacy) is True
    assert security.verify_password("other", legacy) is False


def test_verify_and_logout_use_token_claims():
    token = security.create_access_token(data={"sub": "trabajador", "rol": "TRABAJADOR"})

    verified = router_public.verify(token=token)
    assert verified["message"] == "Token válido"
    assert verified["usuario"] == {"username": "trabajador", "rol": "TRABAJADOR"}

    closed = router_public.logout(token=token)
    assert closed == {
        "success": True,
        "message": "Sesion cerrada exitosamente",
        "usuario": "trabajador",
    }


def test_expired_token_is_rejected():
    token = security.create_access_token(
        data={"sub": "admin", "rol": "ADMIN"},
        expires_delta=timedelta(seconds=-5),
    )

    with pytest.raises(HTTPException) as verify_exc:
        router_public.verify(token=token)
    assert verify_exc.value.detail == "Token inválido o expirado"

    with pytest.raises(HTTPException) as logout_exc:
        router_public.logout(token=token)
    assert logout_exc.value.detail == "Token invalido"


def test_bearer_header_is_required():
    with pytest.raises(HTTPException) as exc:
        security.get_bearer_token(authorization=None)
    assert exc.value.status_code == 401

    assert security.get_bearer_token(authorization="Bearer abc") == "abc"
