"""
Tareas app

Work assigned by the administrator to a worker: how many figures to make
and by when. Tasks move PENDIENTE -> EN_PROCESO -> COMPLETADA.
"""

from . import models  # noqa: F401

__all__ = ["models"]
