"""
Warehouse inventory engine.
Category index, per-category product collections and stock analysis.
"""

__version__ = "1.0.0"
