"""
Mapa hexagonalna (HexMap) - ograniczony region z tablicą węzłów.

HexMap zarządza jednym regionem:
- Określa promień regionu (w komórkach) i Layout (hex <-> piksele)
- Przechowuje tablicę węzłów: Axial -> HexNode
- Pozwala scalić tablicę pod-regionu do regionu nadrzędnego

Kształt regionu:
    Region o promieniu R to wszystkie komórki w odległości <= R
    od komórki (0, 0). Liczba komórek: 3R(R+1) + 1.

    Pętla wyliczająca (standardowe ograniczenie hex-range):
        for q in [-R, R]:
            for r in [max(-R, -q-R), min(R, -q+R)]:
                ...

Cykl życia:
    1. HexMap(...) - pusta tablica węzłów
    2. spawn_entities() - jedyne miejsce, gdzie ustalana jest
       przynależność komórek; każda dostaje domyślny HexNode
    3. ScatterGenerator wypełnia wybrane węzły kategorią i wartością
    4. Do końca życia regionu tablica jest tylko czytana
       (poza punktowymi zmianami set_node / clr_node)

Zapytania o komórki spoza tablicy NIE są błędem:
    get_value -> 0, get_entity -> None, get_event_key -> EventKey.NONE

Przykład użycia:
    >>> hex_map = HexMap(Vec2(64, 64), Style.POINTY, Vec2(0, 0), radius=2)
    >>> handles = hex_map.spawn_entities()
    >>> len(handles)
    19
    >>> hex_map.on_grid(Axial(2, 0))
    True
    >>> hex_map.get_value(Axial(5, 5))
    0
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Any, Callable, Dict, Iterator, List, Optional, TYPE_CHECKING

from .hex_coord import Axial
from .layout import Layout, Style, Vec2

if TYPE_CHECKING:
    from ..events.event_logger import EventLogger


ORIGIN = Axial(0, 0)


class EventKey(Enum):
    """Kategoria węzła (rodzaj punktu zainteresowania)."""

    NONE = auto()    # pusta komórka
    COMBAT = auto()  # zasadzka
    ENERGY = auto()  # gwiazda - źródło energii
    MINING = auto()  # pas asteroid - surowce


@dataclass
class HexNode:
    """
    Rekord jednej komórki.

    Attributes:
        key (EventKey): Kategoria punktu
        value (int): Wielkość (np. ilość energii)
        entity (Any): Opcjonalna referencja do obiektu sceny
    """
    key: EventKey = EventKey.NONE
    value: int = 0
    entity: Optional[Any] = None


@dataclass(frozen=True)
class CellHandle:
    """Domyślny uchwyt komórki zwracany przez spawn_entities."""
    hex: Axial
    center: Vec2


# (hex, środek w pikselach) -> obiekt sceny wywołującego
CellFactory = Callable[[Axial, Vec2], Any]


class HexMap:
    """
    Region hex o stałym promieniu z tablicą węzłów.

    Attributes:
        radius (int): Promień regionu w komórkach
        layout (Layout): Mapowanie hex <-> piksele
        nodes (Dict[Axial, HexNode]): Tablica węzłów

    Example:
        >>> m = HexMap(Vec2(34, 34), Style.POINTY, Vec2(0, 0), 12)
        >>> _ = m.spawn_entities()
        >>> len(m)
        469
    """

    def __init__(self, cell_size: Vec2, style: Style, origin: Vec2, radius: int):
        """
        Tworzy region z pustą tablicą węzłów.

        Args:
            cell_size: Promień komórki w pikselach
            style: Orientacja komórek
            origin: Pozycja środka komórki (0, 0) w pikselach
            radius: Promień regionu w komórkach (>= 0)

        Raises:
            ValueError: Jeśli radius < 0
        """
        if radius < 0:
            raise ValueError(f"Map radius must be >= 0, got {radius}")
        self.radius = radius
        self.layout = Layout(origin, cell_size, style)
        self.nodes: Dict[Axial, HexNode] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # TWORZENIE KOMÓREK
    # ─────────────────────────────────────────────────────────────────────────

    def cells(self) -> Iterator[Axial]:
        """Wylicza wszystkie komórki regionu (kolejność: q, potem r)."""
        n = self.radius
        for q in range(-n, n + 1):
            r1 = max(-n, -q - n)
            r2 = min(n, -q + n)
            for r in range(r1, r2 + 1):
                yield Axial(q, r)

    def spawn_entities(self, factory: Optional[CellFactory] = None) -> List[Any]:
        """
        Tworzy węzły dla wszystkich komórek regionu.

        Dla każdej komórki wylicza środek w pikselach, tworzy uchwyt
        (factory(hex, center) albo CellHandle) i wstawia domyślny
        HexNode z tym uchwytem jako entity. Poprzednia tablica
        jest zastępowana.

        Args:
            factory: Opcjonalna funkcja tworząca obiekt sceny dla komórki

        Returns:
            List: Uchwyty w kolejności wyliczania komórek
        """
        handles: List[Any] = []
        grid: Dict[Axial, HexNode] = {}

        for hex in self.cells():
            center = self.layout.center_for(hex)
            handle = factory(hex, center) if factory else CellHandle(hex, center)
            grid[hex] = HexNode(entity=handle)
            handles.append(handle)

        self.nodes = grid
        return handles

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def on_grid(self, hex: Axial) -> bool:
        """
        Sprawdza czy komórka należy do regionu.

        Returns:
            bool: True jeśli distance(hex, (0, 0)) <= radius
        """
        return ORIGIN.distance(hex) <= self.radius

    def get_hex(self, point: Vec2) -> Axial:
        """Komórka pod punktem w pikselach (Layout.hex_for)."""
        return self.layout.hex_for(point)

    def get_node(self, hex: Axial) -> Optional[HexNode]:
        """Węzeł komórki lub None."""
        return self.nodes.get(hex)

    def get_value(self, hex: Axial) -> int:
        """Wartość węzła, 0 dla komórki spoza tablicy."""
        node = self.nodes.get(hex)
        return node.value if node else 0

    def get_entity(self, hex: Axial) -> Optional[Any]:
        """Referencja obiektu sceny, None dla komórki spoza tablicy."""
        node = self.nodes.get(hex)
        return node.entity if node else None

    def get_event_key(self, hex: Axial) -> EventKey:
        """Kategoria węzła, EventKey.NONE dla komórki spoza tablicy."""
        node = self.nodes.get(hex)
        return node.key if node else EventKey.NONE

    def __contains__(self, hex: Axial) -> bool:
        return hex in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    # ─────────────────────────────────────────────────────────────────────────
    # ZMIANY PUNKTOWE
    # ─────────────────────────────────────────────────────────────────────────

    def set_node(self, hex: Axial, key: EventKey, value: int) -> bool:
        """
        Ustawia kategorię i wartość istniejącego węzła.

        Entity pozostaje bez zmian.

        Returns:
            bool: False jeśli komórki nie ma w tablicy
        """
        node = self.nodes.get(hex)
        if node is None:
            return False
        node.key = key
        node.value = value
        return True

    def clr_node(self, hex: Axial) -> Optional[Any]:
        """
        Czyści węzeł (np. po zebraniu surowca).

        Kategoria wraca do NONE, wartość do 0, a entity jest
        odłączane i zwracane, żeby wywołujący mógł usunąć obiekt sceny.

        Returns:
            Optional[Any]: Odłączone entity lub None
        """
        node = self.nodes.get(hex)
        if node is None:
            return None
        entity = node.entity
        self.nodes[hex] = HexNode()
        return entity

    # ─────────────────────────────────────────────────────────────────────────
    # SCALANIE REGIONÓW
    # ─────────────────────────────────────────────────────────────────────────

    def collect(self, other: HexMap, logger: Optional["EventLogger"] = None) -> int:
        """
        Scala tablicę węzłów innego regionu do tego regionu.

        Każda komórka `other` jest rzutowana przez piksele:
            self.layout.hex_for(other.layout.center_for(hex))
        i jej węzeł (kopia) nadpisuje węzeł w self.

        Polityka konfliktów: ostatni zapis wygrywa (bez uśredniania).
        Przy różnych rozmiarach komórek wiele komórek pod-regionu
        może trafić w jedną komórkę rodzica. Rzuty poza region
        rodzica są pomijane (i logowane, jeśli podano logger).

        Args:
            other: Pod-region do scalenia
            logger: Opcjonalny log generacji

        Returns:
            int: Liczba scalonych węzłów
        """
        merged = 0
        for hex, node in other.nodes.items():
            target = self.layout.hex_for(other.layout.center_for(hex))
            if not self.on_grid(target):
                if logger is not None:
                    logger.log_collect_skipped(hex, target)
                continue
            self.nodes[target] = replace(node)
            merged += 1

        if logger is not None:
            logger.log_collect(merged, len(other.nodes))
        return merged

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG / WIZUALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def debug_print(self) -> str:
        """
        Zwraca tekstową reprezentację regionu do debugowania.

        Legenda:
            . = pusta komórka
            C = COMBAT, E = ENERGY, M = MINING
            ? = komórka regionu bez węzła (przed spawn_entities)

        Returns:
            str: Wiersze r od -R do R
        """
        symbols = {
            EventKey.NONE: ".",
            EventKey.COMBAT: "C",
            EventKey.ENERGY: "E",
            EventKey.MINING: "M",
        }
        n = self.radius
        lines = []
        for r in range(-n, n + 1):
            row = []
            for q in range(max(-n, -r - n), min(n, -r + n) + 1):
                node = self.nodes.get(Axial(q, r))
                row.append(symbols[node.key] if node else "?")
            lines.append(" " * abs(r) + " ".join(row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"HexMap(radius={self.radius}, style={self.layout.style.name}, "
            f"origin=({self.layout.origin.x}, {self.layout.origin.y}), nodes={len(self.nodes)})"
        )
