"""Run the inventory API under uvicorn (`inventario-serve`)."""

import os
from typing import Any, Dict

import uvicorn

APP_PATH = "inventario.main:app"
DEFAULT_PORT = 7000
_TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() in _TRUTHY


def build_run_options() -> Dict[str, Any]:
    """
    uvicorn keyword arguments taken from the environment.

    HOST, PORT, RELOAD, LOG_LEVEL and FORWARDED_ALLOW_IPS map onto the
    uvicorn options of the same name. TLS is only enabled when both
    SSL_CERTFILE and SSL_KEYFILE are set.
    """
    options: Dict[str, Any] = {
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": int(os.getenv("PORT") or DEFAULT_PORT),
        "reload": _flag("RELOAD"),
        "log_level": os.getenv("LOG_LEVEL", "info").lower(),
        "proxy_headers": True,
        "forwarded_allow_ips": os.getenv("FORWARDED_ALLOW_IPS", "*"),
    }
    certfile, keyfile = os.getenv("SSL_CERTFILE"), os.getenv("SSL_KEYFILE")
    if certfile and keyfile:
        options.update(ssl_certfile=certfile, ssl_keyfile=keyfile)
    return options


def main() -> None:
    uvicorn.run(APP_PATH, **build_run_options())


if __name__ == "__main__":
    main()
