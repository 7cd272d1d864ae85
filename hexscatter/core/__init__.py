"""
Core module - podstawowe komponenty mapy.

Zawiera:
- Axial, Cuboid: Współrzędne hexagonalne (osiowe i sześcienne)
- Direction, Diagonal: Kierunki sąsiadów i przekątnych
- Layout, Style, Vec2: Mapowanie hex <-> piksele
- HexMap, HexNode: Region z tablicą węzłów
- Shift64: Deterministyczny generator losowości
- ConfigLoader: Wczytywanie konfiguracji z defaults
"""

from .hex_coord import Axial, Cuboid, Direction, Diagonal, round_to_axial
from .layout import Layout, Style, Vec2, Orientation
from .hex_map import HexMap, HexNode, EventKey, CellHandle
from .rng import Shift64, seed_from
from .config_loader import ConfigLoader

__all__ = [
    "Axial", "Cuboid", "Direction", "Diagonal", "round_to_axial",
    "Layout", "Style", "Vec2", "Orientation",
    "HexMap", "HexNode", "EventKey", "CellHandle",
    "Shift64", "seed_from", "ConfigLoader",
]
