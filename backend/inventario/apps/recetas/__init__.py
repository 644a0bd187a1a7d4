"""
Recetas app

Manufacturing recipes: time, instructions, tools and the raw materials
needed to make a catalogue product.
"""

from . import models  # noqa: F401

__all__ = ["models"]
