"""
Orientacja i Layout - konwersja hex <-> piksele.

Layout definiuje mapowanie jednej siatki na płaszczyznę:
- origin: punkt w pikselach odpowiadający komórce (0, 0)
- size: "promień" komórki w pikselach (osobno dla x i y)
- style: orientacja komórek (FLAT albo POINTY)

Na jednej scenie może istnieć wiele Layoutów jednocześnie
(region główny i pod-regiony w innych miejscach i skalach).

MACIERZE ORIENTACJI:
═══════════════════════════════════════════════════════════════════

    FLAT (płaski wierzch)
    ─────────────────────────────────────────────────────────────
    forward (hex -> piksel):  [3/2,  0,    √3/2, √3  ]
    inverse (piksel -> hex):  [2/3,  0,   -1/3,  √3/3]
    kąt startowy: 0

    POINTY (szpic u góry)
    ─────────────────────────────────────────────────────────────
    forward (hex -> piksel):  [√3,   √3/2, 0,    3/2 ]
    inverse (piksel -> hex):  [√3/3, -1/3, 0,    2/3 ]
    kąt startowy: 0.5

    hex -> piksel:
        x = (f0 * q + f1 * r) * size.x + origin.x
        y = (f2 * q + f3 * r) * size.y + origin.y

    piksel -> hex:
        q = b0 * x' + b1 * y'
        r = b2 * x' + b3 * y'
        gdzie x' = (x - origin.x) / size.x, y' = (y - origin.y) / size.y,
        potem round_to_axial(q, -q-r, r)

RING / AREA:
═══════════════════════════════════════════════════════════════════

    ring_for rasteryzuje okrąg algorytmem midpoint (8-krotna symetria)
    w przestrzeni pikseli wokół środka komórki i mapuje każdy punkt
    z powrotem na komórkę. area_for dodatkowo prowadzi linię od każdej
    komórki pierścienia do środka, dając wypełniony dysk.

Przykład użycia:
    >>> layout = Layout(Vec2(0, 0), Vec2(64, 64), Style.POINTY)
    >>> layout.center_for(Axial(1, 0))
    Vec2(x=110.85..., y=0.0)
    >>> layout.hex_for(Vec2(110.0, 3.0))
    Axial(q=1, r=0)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from functools import lru_cache
import math
from typing import List, Set, Tuple

from .hex_coord import Axial, round_to_axial


SQRT3 = math.sqrt(3.0)


class Style(Enum):
    """Orientacja komórek hex."""

    FLAT = auto()    # płaski wierzch, wierzchołki po bokach
    POINTY = auto()  # szpic u góry, płaskie boki

    @classmethod
    def parse(cls, name: str) -> Style:
        """
        Zamienia nazwę z konfiguracji na Style.

        Args:
            name: "flat" / "pointy" (wielkość liter bez znaczenia)

        Raises:
            ValueError: Jeśli nazwa nie jest znana
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown hex style: {name!r}") from None


@dataclass(frozen=True)
class Vec2:
    """Punkt lub wektor na płaszczyźnie (piksele)."""
    x: float
    y: float

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def length(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class Orientation:
    """
    Niemutowalna macierz orientacji dla jednego stylu.

    Attributes:
        style (Style): Styl, dla którego wyliczono macierz
        forward (Tuple): 4 współczynniki hex -> piksel
        inverse (Tuple): 4 współczynniki piksel -> hex
        start_angle (float): Przesunięcie kąta narożników (w 1/6 obrotu)
        corner_cos (Tuple): cos kąta każdego z 6 narożników
        corner_sin (Tuple): sin kąta każdego z 6 narożników
    """
    style: Style
    forward: Tuple[float, float, float, float]
    inverse: Tuple[float, float, float, float]
    start_angle: float
    corner_cos: Tuple[float, ...] = field(repr=False)
    corner_sin: Tuple[float, ...] = field(repr=False)

    @staticmethod
    @lru_cache(maxsize=None)
    def for_style(style: Style) -> Orientation:
        """
        Zwraca (współdzieloną) orientację dla stylu.

        Args:
            style: FLAT albo POINTY

        Returns:
            Orientation: Wyliczona raz na styl
        """
        if style is Style.FLAT:
            forward = (3.0 / 2.0, 0.0, SQRT3 / 2.0, SQRT3)
            inverse = (2.0 / 3.0, 0.0, -1.0 / 3.0, SQRT3 / 3.0)
            start = 0.0
        else:
            forward = (SQRT3, SQRT3 / 2.0, 0.0, 3.0 / 2.0)
            inverse = (SQRT3 / 3.0, -1.0 / 3.0, 0.0, 2.0 / 3.0)
            start = 0.5

        angles = [2.0 * math.pi * (start + i) / 6.0 for i in range(6)]
        return Orientation(
            style=style,
            forward=forward,
            inverse=inverse,
            start_angle=start,
            corner_cos=tuple(math.cos(a) for a in angles),
            corner_sin=tuple(math.sin(a) for a in angles),
        )


@dataclass
class Layout:
    """
    Mapowanie hex <-> piksele dla jednej siatki.

    Attributes:
        origin (Vec2): Pozycja środka komórki (0, 0)
        size (Vec2): Promień komórki w pikselach
        style (Style): Orientacja komórek
        orientation (Orientation): Macierze dla stylu (wyliczane automatycznie)
    """
    origin: Vec2
    size: Vec2
    style: Style = Style.FLAT
    orientation: Orientation = field(init=False, repr=False)

    def __post_init__(self):
        self.orientation = Orientation.for_style(self.style)

    # ─────────────────────────────────────────────────────────────────────────
    # KONWERSJA
    # ─────────────────────────────────────────────────────────────────────────

    def hex_for(self, point: Vec2) -> Axial:
        """
        Zwraca komórkę zawierającą punkt.

        Args:
            point: Punkt w pikselach

        Returns:
            Axial: Komórka (po zaokrągleniu cube)
        """
        b = self.orientation.inverse
        x = (point.x - self.origin.x) / self.size.x
        y = (point.y - self.origin.y) / self.size.y
        q = b[0] * x + b[1] * y
        r = b[2] * x + b[3] * y
        return round_to_axial(q, -q - r, r)

    def center_for(self, hex: Axial) -> Vec2:
        """
        Zwraca środek komórki w pikselach.

        Args:
            hex: Komórka

        Returns:
            Vec2: Środek komórki
        """
        f = self.orientation.forward
        x = (f[0] * hex.q + f[1] * hex.r) * self.size.x
        y = (f[2] * hex.q + f[3] * hex.r) * self.size.y
        return Vec2(x + self.origin.x, y + self.origin.y)

    def hex_size(self) -> Vec2:
        """
        Wymiary prostokąta otaczającego jedną komórkę.

        Returns:
            Vec2: FLAT -> (2w, √3h), POINTY -> (√3w, 2h)
        """
        if self.style is Style.FLAT:
            return Vec2(2.0 * self.size.x, SQRT3 * self.size.y)
        return Vec2(SQRT3 * self.size.x, 2.0 * self.size.y)

    # ─────────────────────────────────────────────────────────────────────────
    # NAROŻNIKI
    # ─────────────────────────────────────────────────────────────────────────

    def corner_offset(self, corner: int) -> Vec2:
        """Przesunięcie narożnika (0-5) względem środka komórki."""
        o = self.orientation
        return Vec2(self.size.x * o.corner_cos[corner], self.size.y * o.corner_sin[corner])

    def polygon_corners(self, hex: Axial) -> List[Vec2]:
        """
        Zwraca 6 narożników komórki w pikselach.

        Rdzeń niczego nie rysuje - to dane dla warstwy prezentacji.
        """
        center = self.center_for(hex)
        return [center + self.corner_offset(i) for i in range(6)]

    # ─────────────────────────────────────────────────────────────────────────
    # RING / AREA
    # ─────────────────────────────────────────────────────────────────────────

    def ring_for(self, center: Axial, radius: float) -> Set[Axial]:
        """
        Zwraca komórki leżące na okręgu o promieniu w pikselach.

        Jeśli promień jest mniejszy niż promień komórki (w obu osiach),
        zwraca tylko center.

        Args:
            center: Środek okręgu (komórka)
            radius: Promień w pikselach

        Returns:
            Set[Axial]: Komórki pierścienia
        """
        if radius < self.size.x and radius < self.size.y:
            return {center}

        cp = self.center_for(center)
        result: Set[Axial] = set()

        px = float(radius)
        py = 0.0
        p = 1.0 - radius

        while px > py:
            if p <= 0.0:
                p = p + 2.0 * py + 1.0
            else:
                px -= 1.0
                p = p + 2.0 * py - 2.0 * px + 1.0

            if px < py:
                break

            for dx, dy in (
                (px, py), (-px, py), (px, -py), (-px, -py),
                (py, px), (-py, px), (py, -px), (-py, -px),
            ):
                result.add(self.hex_for(Vec2(cp.x + dx, cp.y + dy)))
            py += 1.0

        if not result:
            result.add(center)
        return result

    def area_for(self, center: Axial, radius: float) -> Set[Axial]:
        """
        Zwraca wypełniony dysk komórek o promieniu w pikselach.

        Każda komórka pierścienia jest łączona linią ze środkiem,
        a wszystkie komórki linii trafiają do wyniku.

        Args:
            center: Środek dysku
            radius: Promień w pikselach

        Returns:
            Set[Axial]: Komórki dysku (zawsze zawiera center)
        """
        result: Set[Axial] = set()
        for hex in self.ring_for(center, radius):
            result.add(hex)
            result.update(Axial.line(hex, center))
        return result
