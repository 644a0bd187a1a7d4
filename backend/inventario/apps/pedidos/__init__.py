"""
Pedidos app

Customer orders with their product lines and the history of production
stages. Finishing an order books a sale in the ventas ledger.
"""

from . import models  # noqa: F401

__all__ = ["models"]
