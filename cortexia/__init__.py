"""
CorteXia API
============

Life dashboard backend: domain record stores, per-domain aggregates,
the life-state scorer, insight generation and natural-language capture.
"""

__version__ = "1.0.0"
