"""
Authentication helpers: password hashes, JWT access tokens and the
FastAPI dependencies that resolve the calling Usuario.

Tokens carry the username as `sub` and the user's role as `rol`. New
passwords are stored as Argon2id; bcrypt hashes written by the previous
desktop client are still accepted at login.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

import bcrypt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError
from fastapi import Depends, Header, HTTPException, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from inventario.apps.usuarios import models as usuario_models
from .database import get_db

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        logger.warning("Ignoring non-integer %s", name)
        return default


SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME_IN_PRODUCTION")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = _int_env("ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60)

BEARER_PREFIX = "Bearer "
BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

_argon2 = PasswordHasher(
    time_cost=_int_env("ARGON2_TIME_COST", 3),
    memory_cost=_int_env("ARGON2_MEMORY_COST", 64 * 1024),
    parallelism=_int_env("ARGON2_PARALLELISM", 2),
)


# ---------------------------------------------------------------------------
# PASSWORDS
# ---------------------------------------------------------------------------


def _check_argon2(plain: str, stored: str) -> bool:
    try:
        return _argon2.verify(stored, plain)
    except (VerificationError, InvalidHash):
        return False


def _check_bcrypt(plain: str, stored: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), stored.encode("utf-8"))
    except ValueError:
        return False


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not plain_password or not hashed_password:
        return False
    if hashed_password.startswith("$argon2"):
        return _check_argon2(plain_password, hashed_password)
    if hashed_password.startswith(BCRYPT_PREFIXES):
        return _check_bcrypt(plain_password, hashed_password)
    logger.warning("Unrecognised password hash format")
    return False


def get_password_hash(password: str) -> str:
    return _argon2.hash(password)


# ---------------------------------------------------------------------------
# TOKENS
# ---------------------------------------------------------------------------


def create_access_token(*, data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign `data` (expects `sub` and `rol`) with an `exp` claim added."""
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {**data, "exp": datetime.utcnow() + lifetime}
    return jwt.encode(claims, SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Optional[str]]]:
    """
    Return `{"username", "rol"}` for a valid token, None otherwise.

    Expired tokens, bad signatures and tokens without a subject are all
    treated as invalid.
    """
    if not token:
        return None
    try:
        claims = jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as exc:
        logger.info("Rejected access token: %s", exc)
        return None
    if not claims.get("sub"):
        return None
    return {"username": claims["sub"], "rol": claims.get("rol")}


# ---------------------------------------------------------------------------
# DEPENDENCIES
# ---------------------------------------------------------------------------


def _unauthorized(detail: str = "Token inválido o expirado") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    token = ""
    if authorization and authorization.startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise _unauthorized("Token de autorización requerido")
    return token


def get_user_by_username(db: Session, username: str) -> Optional[usuario_models.Usuario]:
    """Active user lookup; deactivated users behave as if they did not exist."""
    if not username:
        return None
    Usuario = usuario_models.Usuario
    return (
        db.query(Usuario)
        .filter(Usuario.username == username.strip(), Usuario.activo.is_(True))
        .first()
    )


def get_current_user(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> usuario_models.Usuario:
    claims = decode_access_token(token)
    user = get_user_by_username(db, claims["username"]) if claims else None
    if user is None:
        raise _unauthorized()
    return user


def require_roles(*allowed_roles: str) -> Callable[..., usuario_models.Usuario]:
    """
    Dependency factory that lets through only users holding one of
    `allowed_roles` (compared case-insensitively):

        current_user: Usuario = Depends(require_roles("ADMIN"))
    """
    wanted = {r.strip().upper() for r in allowed_roles if r and r.strip()}
    if not wanted:
        raise ValueError("require_roles() needs at least one role")

    def dependency(
        current_user: usuario_models.Usuario = Depends(get_current_user),
    ) -> usuario_models.Usuario:
        if (current_user.rol or "").strip().upper() not in wanted:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Permisos insuficientes para esta operación",
            )
        return current_user

    return dependency
