# backend/inventario/main.py
import logging
import os
from typing import List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .utils.responses import error_body

from .apps.usuarios.router_public import router as auth_router
from .apps.usuarios.router_admin import router as usuarios_router
from .apps.notifications.router import router as notifications_router
from .apps.productos.router import router as productos_router
from .apps.ventas.router import router as ventas_router
from .apps.pedidos.router import router as pedidos_router
from .apps.herramientas.router import router as herramientas_router
from .apps.materiales.router import router as materiales_router
from .apps.reparaciones.router import router as reparaciones_router
from .apps.recetas.router import router as recetas_router
from .apps.tareas.router import router as tareas_router
from .apps.estadisticas.router import router as estadisticas_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def _allowed_origins() -> List[str]:
    """
    Parse CORS_ALLOWED_ORIGINS from env.

    Accepts comma-separated origins. If unset, any origin is allowed; the
    web client is served from whatever host runs the shop.
    """
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "")
    if raw:
        origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
        if origins:
            return origins
    return ["*"]


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Datos inválidos: {field}: {first.get('msg')}" if field else f"Datos inválidos: {first.get('msg')}"
    else:
        message = "Datos inválidos"
    return JSONResponse(status_code=400, content=error_body(message))


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=error_body("Error interno del servidor"))


app = FastAPI(title="Inventario Alma Jesus API", version="1.0.0")
cors_origins = _allowed_origins()
allow_credentials = "*" not in cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
app.add_exception_handler(RequestValidationError, _validation_error_handler)
app.add_exception_handler(Exception, _unhandled_exception_handler)


@app.get("/", tags=["health"])
def read_root():
    return {"status": "ok", "message": "Inventario Alma Jesus backend is running"}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(usuarios_router, prefix=API_PREFIX)
app.include_router(notifications_router, prefix=API_PREFIX)
app.include_router(productos_router, prefix=API_PREFIX)
app.include_router(ventas_router, prefix=API_PREFIX)
app.include_router(pedidos_router, prefix=API_PREFIX)
app.include_router(herramientas_router, prefix=API_PREFIX)
app.include_router(materiales_router, prefix=API_PREFIX)
app.include_router(reparaciones_router, prefix=API_PREFIX)
app.include_router(recetas_router, prefix=API_PREFIX)
app.include_router(tareas_router, prefix=API_PREFIX)
app.include_router(estadisticas_router, prefix=API_PREFIX)
