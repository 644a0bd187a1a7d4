# backend/inventario/apps/usuarios/router_public.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from inventario.database import get_db
from inventario.security import decode_access_token, get_bearer_token
from inventario.utils.responses import envelope
from . import schemas, services

router = APIRouter(prefix="/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# LOGIN
# ---------------------------------------------------------------------------


@router.post("/login", summary="Login with username and password")
def login(
    payload: schemas.LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Username/password login.

    Returns a bearer token valid for ACCESS_TOKEN_EXPIRE_MINUTES plus the
    public fields of the user.
    """
    if not payload.username or not payload.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username y password son requeridos",
        )

    try:
        user = services.authenticate_user(
            db,
            username=payload.username,
            password=payload.password,
        )
    except services.AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        )

    token, _expires_in = services.issue_access_token_for_user(user)

    return envelope(
        "Login exitoso",
        token=token,
        usuario=schemas.UsuarioLogin.model_validate(user).model_dump(by_alias=True),
    )


# ---------------------------------------------------------------------------
# TOKEN CHECKS
# ---------------------------------------------------------------------------


@router.post("/logout", summary="Close the client session")
def logout(token: str = Depends(get_bearer_token)):
    """
    Tokens are stateless; the client drops its copy. The token is still
    validated so a stale client gets a 401.
    """
    claims = decode_access_token(token)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token invalido",
        )
    return envelope("Sesion cerrada exitosamente", usuario=claims["username"])


@router.get("/verify", summary="Check a bearer token")
def verify(token: str = Depends(get_bearer_token)):
    claims = decode_access_token(token)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido o expirado",
        )
    return envelope("Token válido", usuario=claims)
