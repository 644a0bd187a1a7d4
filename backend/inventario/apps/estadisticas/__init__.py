"""
Estadisticas app

Read-only dashboard totals and per-period chart data for sales, repairs
and material consumption. There are no tables of its own.
"""
