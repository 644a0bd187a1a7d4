from __future__ import annotations

from typing import Any, Optional


def envelope(message: Optional[str] = None, **payload: Any) -> dict:
    """
    Build the success envelope every endpoint returns:

        {"success": true, "message": "...", <payload keys>}

    Error responses use the same shape with `success: false`; they are
    produced by the exception handlers in `inventario.main`.
    """
    body: dict = {"success": True}
    if message is not None:
        body["message"] = message
    body.update(payload)
    return body


def error_body(message: Any) -> dict:
    return {"success": False, "message": message}
