from __future__ import annotations

import create_initial_users
from inventario import security
from inventario.apps.usuarios import models


def test_seed_users_is_idempotent(db_session, monkeypatch):
    monkeypatch.setenv("INITIAL_ADMIN_PASSWORD", "taller2024")

    created = create_initial_users.seed_users(db_session)
    assert sorted(u.id for u in created) == ["admin001", "trab001"]

    admin = db_session.get(models.Usuario, "admin001")
    assert admin.rol == "ADMIN"
    assert security.verify_password("taller2024", admin.password)

    assert create_initial_users.seed_users(db_session) == []
    assert db_session.query(models.Usuario).count() == 2
