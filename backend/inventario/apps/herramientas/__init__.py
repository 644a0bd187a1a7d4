"""
Herramientas app

Workshop tools lent to workers. A tool is addressed by its numeric id or
its exact name; lending decrements the available units and returning
puts one back.
"""

from . import models  # noqa: F401

__all__ = ["models"]
