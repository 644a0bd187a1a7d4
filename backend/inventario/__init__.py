# backend/inventario/__init__.py
"""
Import ORM models from each app so that:

- Alembic and Base.metadata.create_all() see all tables.
- String relationships ("Producto", "RecetaMaterial", ...) resolve no
  matter which app is imported first.

The actual model classes are kept in inventario/apps/*/models.py.
"""

from .apps.usuarios import models as usuarios_models              # users / login
from .apps.notifications import models as notifications_models    # email log
from .apps.productos import models as productos_models            # catalogue
from .apps.ventas import models as ventas_models                  # sales
from .apps.pedidos import models as pedidos_models                # orders + stages
from .apps.herramientas import models as herramientas_models      # workshop tools
from .apps.materiales import models as materiales_models          # raw materials + movements
from .apps.reparaciones import models as reparaciones_models      # repairs + history + materials used
from .apps.recetas import models as recetas_models                # recipes
from .apps.tareas import models as tareas_models                  # worker tasks

__all__ = [
    "usuarios_models",
    "notifications_models",
    "productos_models",
    "ventas_models",
    "pedidos_models",
    "herramientas_models",
    "materiales_models",
    "reparaciones_models",
    "recetas_models",
    "tareas_models",
]
