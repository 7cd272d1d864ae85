"""
Scatter module - generowanie punktów zainteresowania.

Zawiera:
- ScatterGenerator: Generacja i zapis punktów do HexMap
- ScatterConfig: Parametry generacji (promienie, iteracje)
- Placement, Point: Wyniki generacji
- InvalidPlacementError: Punkt poza tablicą węzłów (tryb strict)
"""

from .generator import (
    ScatterGenerator,
    ScatterConfig,
    Placement,
    Point,
    InvalidPlacementError,
    ITERATIONS,
    MAX_CHECKS,
)

__all__ = [
    "ScatterGenerator", "ScatterConfig", "Placement", "Point",
    "InvalidPlacementError", "ITERATIONS", "MAX_CHECKS",
]
