# backend/inventario/apps/usuarios/__init__.py
"""
Usuarios app

Responsible for:
- Application users (administrators and workshop workers)
- Public auth endpoints (login, logout, token verification)
- User administration (create, change password, deactivate)

Only the models are imported here: `inventario.security` loads them while
the routers and services depend on `inventario.security` in turn.
"""

from . import models  # noqa: F401

__all__ = ["models"]
