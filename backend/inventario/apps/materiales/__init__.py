"""
Materiales app

Raw materials (materia prima) with their stock movements: entradas and
salidas from manual stock corrections, consumos from repair work.
"""

from . import models  # noqa: F401

__all__ = ["models"]
