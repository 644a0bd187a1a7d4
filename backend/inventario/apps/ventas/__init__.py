"""
Ventas app

Sales ledger. Every sale references a catalogue product; sales created
when an order is finished carry `tipo="pedido"`.
"""

from . import models  # noqa: F401

__all__ = ["models"]
