"""
Reparaciones app

Repair jobs for customers' figures: state workflow, state history,
receipts, and the raw materials consumed by each job.
"""

from . import models  # noqa: F401

__all__ = ["models"]
