"""
Generator rozmieszczenia punktów zainteresowania (scatter).

Dla regionu HexMap i generatora Shift64 tworzy zbiór punktów
o charakterze "blue noise" - punkty są rozłożone w miarę równomiernie
i nigdy nie leżą bliżej siebie niż MIN_RADIUS.

ALGORYTM:
═══════════════════════════════════════════════════════════════════

    1. PROSTOKĄT GENERACJI
       ─────────────────────────────────────────────────────────
       • wymiary = hex_size * (2R + 1) - bounds_margin
       • punkty (x, y) są całkowite, w zakresie [0, w) x [0, h)
       • środek prostokąta odpowiada origin regionu

    2. PUNKT STARTOWY
       ─────────────────────────────────────────────────────────
       • losowy punkt w centralnej ćwiartce prostokąta
         (x w [w/4, 3w/4), y w [h/4, 3h/4))

    3. ITERACJE (ITERATIONS = 96)
       ─────────────────────────────────────────────────────────
       • do MAX_CHECKS = 32 prób: losuj kandydata, znajdź
         najbliższy przyjęty punkt (skan liniowy)
       • przerwij, gdy odległość w [MIN_RADIUS, MAX_RADIUS]

    4. PRZYCIĄGNIĘCIE
       ─────────────────────────────────────────────────────────
       • odległość > MAX_RADIUS -> przesuń kandydata po prostej
         do sąsiada na odległość AVERAGE_RADIUS (obcięcie do
         całkowitych w stronę sąsiada, więc nigdy dalej)

    5. AKCEPTACJA
       ─────────────────────────────────────────────────────────
       • komórka punktu musi należeć do regionu
       • odległość do najbliższego punktu (po przyciągnięciu
         mierzona ponownie) >= MIN_RADIUS
       • inaczej iteracja nie daje punktu - bez ponawiania

    6. ZAPIS DO TABLICY
       ─────────────────────────────────────────────────────────
       • dla każdego punktu: kategoria (ENERGY / MINING),
         wartość, komórka przez Layout
       • komórka spoza tablicy -> INVALID_PLACEMENT w logu
         (a w trybie strict wyjątek InvalidPlacementError)

Liczba punktów NIE jest gwarantowana - wynika z pasma promieni.
Gwarantowane są odstępy: żadne dwa punkty bliżej niż MIN_RADIUS.

DETERMINIZM:
═══════════════════════════════════════════════════════════════════

    • Ten sam seed i te same parametry = te same punkty
    • Kolejność losowań: start (x, y), kandydaci (x, y),
      potem dla każdego punktu (kategoria, wartość)
    • Generator jest przekazywany jawnie - nic nie jest globalne

Przykład użycia:
    >>> hex_map = HexMap(Vec2(64, 64), Style.POINTY, Vec2(0, 0), 12)
    >>> _ = hex_map.spawn_entities()
    >>> generator = ScatterGenerator(ScatterConfig())
    >>> placements = generator.spawn_points(Shift64(seed_from("near")), hex_map)
    >>> hex_map.get_event_key(placements[0].hex)
    <EventKey.ENERGY: 3>
"""

from __future__ import annotations
from dataclasses import dataclass, fields
import math
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..core.hex_coord import Axial
from ..core.hex_map import EventKey, HexMap
from ..core.layout import Vec2
from ..core.rng import Shift64
from ..events.event_logger import EventLogger


ITERATIONS = 96
MAX_CHECKS = 32


class InvalidPlacementError(ValueError):
    """Punkt trafił w komórkę, której nie ma w tablicy węzłów."""


@dataclass(frozen=True)
class Point:
    """Punkt w całkowitej siatce generacji (nie piksele świata)."""
    x: int
    y: int

    def distance(self, other: Point) -> float:
        """Odległość euklidesowa."""
        dx = float(self.x - other.x)
        dy = float(self.y - other.y)
        return math.sqrt(dx * dx + dy * dy)

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass
class ScatterConfig:
    """
    Parametry generacji.

    Attributes:
        min_radius (float): MIN_RADIUS - minimalny odstęp punktów
        average_radius (float): AVERAGE_RADIUS - odległość po przyciągnięciu
        max_radius (float): MAX_RADIUS - próg przyciągania
        iterations (int): ITERATIONS - liczba przebiegów
        max_checks (int): MAX_CHECKS - prób kandydata na przebieg
        bounds_margin (int): Korekta prostokąta generacji w pikselach
        category_split (int): next_int(256) > split -> ENERGY, inaczej MINING
        value_range (int): Wartość węzła = next_int(value_range) + 1
    """
    min_radius: float = 96.0
    average_radius: float = 128.0
    max_radius: float = 192.0
    iterations: int = ITERATIONS
    max_checks: int = MAX_CHECKS
    bounds_margin: int = 4
    category_split: int = 128
    value_range: int = 100

    def __post_init__(self):
        if self.min_radius <= 0:
            raise ValueError(f"min_radius must be > 0, got {self.min_radius}")
        if not self.min_radius <= self.average_radius <= self.max_radius:
            raise ValueError(
                "Scatter radii must satisfy min <= average <= max, got "
                f"{self.min_radius} / {self.average_radius} / {self.max_radius}"
            )
        if self.iterations < 0 or self.max_checks < 0:
            raise ValueError("iterations and max_checks must be >= 0")
        if self.value_range < 1:
            raise ValueError(f"value_range must be >= 1, got {self.value_range}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ScatterConfig:
        """
        Tworzy konfigurację ze słownika (np. profil z ConfigLoader).

        Nieznane klucze (np. "id" profilu) są ignorowane.
        """
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


@dataclass(frozen=True)
class Placement:
    """
    Zapisany punkt zainteresowania.

    Attributes:
        hex (Axial): Komórka punktu
        center (Vec2): Środek komórki w pikselach
        point (Point): Punkt w siatce generacji
        key (EventKey): Wylosowana kategoria
        value (int): Wylosowana wartość
    """
    hex: Axial
    center: Vec2
    point: Point
    key: EventKey
    value: int


# Placement -> obiekt sceny (zapisywany jako entity węzła) albo None
PlacementCallback = Callable[[Placement], Any]


class ScatterGenerator:
    """
    Generator punktów zainteresowania dla regionów HexMap.

    Attributes:
        config (ScatterConfig): Parametry generacji
        logger (EventLogger): Wspólny log wszystkich przebiegów (summary sumowane)
        strict (bool): Czy INVALID_PLACEMENT ma rzucać wyjątek
        invalid_count (int): Liczba błędnych zapisów od utworzenia
    """

    def __init__(
        self,
        config: Optional[ScatterConfig] = None,
        logger: Optional[EventLogger] = None,
        strict: bool = False,
    ):
        self.config = config or ScatterConfig()
        self.logger = logger if logger is not None else EventLogger()
        self.strict = strict
        self.invalid_count = 0

    # ─────────────────────────────────────────────────────────────────────────
    # GEOMETRIA SIATKI GENERACJI
    # ─────────────────────────────────────────────────────────────────────────

    def bounds(self, hex_map: HexMap) -> Tuple[int, int]:
        """
        Wymiary prostokąta generacji dla regionu.

        Returns:
            Tuple[int, int]: (szerokość, wysokość), co najmniej 1
        """
        size = hex_map.layout.hex_size()
        cells = 2 * hex_map.radius + 1
        width = int(size.x * cells) - self.config.bounds_margin
        height = int(size.y * cells) - self.config.bounds_margin
        return max(1, width), max(1, height)

    @staticmethod
    def to_world(point: Point, bounds: Tuple[int, int], hex_map: HexMap) -> Vec2:
        """
        Zamienia punkt siatki generacji na piksele świata.

        Środek prostokąta generacji trafia w origin regionu.
        """
        width, height = bounds
        origin = hex_map.layout.origin
        return Vec2(point.x - width / 2.0 + origin.x, point.y - height / 2.0 + origin.y)

    def hex_of(self, point: Point, bounds: Tuple[int, int], hex_map: HexMap) -> Axial:
        """Komórka regionu pod punktem siatki generacji."""
        return hex_map.get_hex(self.to_world(point, bounds, hex_map))

    @staticmethod
    def nearest(points: Sequence[Point], candidate: Point) -> Tuple[Optional[Point], float]:
        """
        Najbliższy przyjęty punkt (skan liniowy).

        Returns:
            Tuple: (punkt, odległość) albo (None, inf) dla pustej listy
        """
        best: Optional[Point] = None
        best_distance = math.inf
        for point in points:
            d = point.distance(candidate)
            if d < best_distance:
                best = point
                best_distance = d
        return best, best_distance

    def pull_towards(self, candidate: Point, attractor: Point, distance: float) -> Point:
        """
        Przesuwa kandydata po prostej do attractor na AVERAGE_RADIUS.

        Przesunięcie jest obcinane w stronę attractor, więc wynik
        nigdy nie leży dalej niż AVERAGE_RADIUS.
        """
        scale = self.config.average_radius / distance
        dx = int((candidate.x - attractor.x) * scale)
        dy = int((candidate.y - attractor.y) * scale)
        return Point(attractor.x + dx, attractor.y + dy)

    # ─────────────────────────────────────────────────────────────────────────
    # GENEROWANIE PUNKTÓW
    # ─────────────────────────────────────────────────────────────────────────

    def generate(self, rng: Shift64, hex_map: HexMap) -> List[Point]:
        """
        Generuje zbiór punktów dla regionu (kroki 1-5).

        Args:
            rng: Generator (przesuwany przy każdym losowaniu)
            hex_map: Region

        Returns:
            List[Point]: Przyjęte punkty (pusta lista dla iterations == 0)
        """
        cfg = self.config
        bounds = self.bounds(hex_map)
        width, height = bounds

        self.logger.log_generation_start(
            hex_map.radius, hex_map.layout.style.name, width, height, seed=rng.seed
        )

        if cfg.iterations == 0:
            return []

        root = Point(
            rng.next_int(max(1, width // 2)) + width // 4,
            rng.next_int(max(1, height // 2)) + height // 4,
        )
        if not hex_map.on_grid(self.hex_of(root, bounds, hex_map)):
            root = Point(width // 2, height // 2)

        points: List[Point] = [root]
        self.logger.log_point_accepted(0, self.hex_of(root, bounds, hex_map), root, 0.0)

        for step in range(1, cfg.iterations + 1):
            candidate: Optional[Point] = None
            attractor: Optional[Point] = None
            distance = 0.0

            for _ in range(cfg.max_checks):
                candidate = Point(rng.next_int(width), rng.next_int(height))
                attractor, distance = self.nearest(points, candidate)
                if cfg.min_radius <= distance <= cfg.max_radius:
                    break

            if candidate is None or attractor is None:
                continue

            if distance > cfg.max_radius:
                moved = self.pull_towards(candidate, attractor, distance)
                self.logger.log_point_recentered(step, candidate, moved, attractor)
                candidate = moved
                _, distance = self.nearest(points, candidate)

            hex = self.hex_of(candidate, bounds, hex_map)
            if not hex_map.on_grid(hex):
                self.logger.log_point_rejected(step, candidate, distance, "off_map")
                continue
            if distance < cfg.min_radius:
                self.logger.log_point_rejected(step, candidate, distance, "too_close")
                continue

            points.append(candidate)
            self.logger.log_point_accepted(step, hex, candidate, distance)

        return points

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPIS DO TABLICY WĘZŁÓW
    # ─────────────────────────────────────────────────────────────────────────

    def spawn_points(
        self,
        rng: Shift64,
        hex_map: HexMap,
        on_place: Optional[PlacementCallback] = None,
    ) -> List[Placement]:
        """
        Generuje punkty i zapisuje je do tablicy węzłów regionu.

        Region powinien mieć już wywołane spawn_entities().

        Args:
            rng: Generator (jedno źródło dla całego przebiegu)
            hex_map: Region do wypełnienia
            on_place: Opcjonalny callback tworzący obiekt sceny; jeśli
                zwróci coś innego niż None, trafia to do entity węzła

        Returns:
            List[Placement]: Zapisane punkty w kolejności generacji

        Raises:
            InvalidPlacementError: Tylko w trybie strict, gdy punkt
                trafi w komórkę spoza tablicy
        """
        cfg = self.config
        bounds = self.bounds(hex_map)
        points = self.generate(rng, hex_map)

        placements: List[Placement] = []
        invalid = 0

        for index, point in enumerate(points):
            key = EventKey.ENERGY if rng.next_int(256) > cfg.category_split else EventKey.MINING
            value = rng.next_int(cfg.value_range) + 1

            hex = self.hex_of(point, bounds, hex_map)
            node = hex_map.get_node(hex)
            if node is None:
                invalid += 1
                self.invalid_count += 1
                self.logger.log_invalid_placement(index, hex, point)
                if self.strict:
                    raise InvalidPlacementError(
                        f"Point {tuple(point)} maps to {hex}, which is not in the node table"
                    )
                continue

            node.key = key
            node.value = value

            placement = Placement(
                hex=hex,
                center=hex_map.layout.center_for(hex),
                point=point,
                key=key,
                value=value,
            )
            if on_place is not None:
                entity = on_place(placement)
                if entity is not None:
                    node.entity = entity

            placements.append(placement)
            self.logger.log_node_placed(index, hex, key.name, value)

        self.logger.log_generation_end(len(points), len(points), len(placements), invalid)
        return placements

    # ─────────────────────────────────────────────────────────────────────────
    # WIELE REGIONÓW
    # ─────────────────────────────────────────────────────────────────────────

    def populate_regions(
        self,
        rng: Shift64,
        parent: HexMap,
        regions: Sequence[HexMap],
        on_place: Optional[PlacementCallback] = None,
    ) -> List[Placement]:
        """
        Wypełnia pod-regiony z jednego generatora i scala je do rodzica.

        Kolejność regionów jest częścią kontraktu determinizmu:
        każdy region zużywa losowania po poprzednim.

        Args:
            rng: Wspólny generator dla wszystkich regionów
            parent: Region nadrzędny (otrzymuje scalone węzły)
            regions: Pod-regiony w kolejności generacji
            on_place: Callback jak w spawn_points

        Returns:
            List[Placement]: Punkty wszystkich pod-regionów (w ich układach)
        """
        placements: List[Placement] = []
        for region in regions:
            if not region.nodes:
                region.spawn_entities()
            placements.extend(self.spawn_points(rng, region, on_place))
            parent.collect(region, self.logger)
        return placements
