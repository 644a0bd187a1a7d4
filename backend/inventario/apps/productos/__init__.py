"""
Productos app

Catalogue of finished figures (modelo, color, size, price, stock) and the
Cloudinary-backed image upload used by the catalogue pages.
"""

from . import models  # noqa: F401

__all__ = ["models"]
