"""
System współrzędnych hexagonalnych (Axial + Cube Coordinates).

Używamy Axial Coordinates (q, r) jako tożsamości komórki:
- q = kolumna (oś pozioma)
- r = wiersz (oś ukośna)

Konwersja do Cube Coordinates:
    s = -q - r
    Cube: (q, r, s) gdzie q + r + s = 0

Współrzędne cube (Cuboid) nigdy nie są przechowywane - zawsze
wyliczamy je z różnicy dwóch komórek axial.

Kierunki (delta w cube):
    Kierunek   (dq, dr, ds)      Przekątna   (dq, dr, ds)
    ─────────────────────────    ─────────────────────────
    Q_NEG      (-1,  0, +1)      Q_NEG       (-2, +1, +1)
    Q_POS      (+1,  0, -1)      Q_POS       (+2, -1, -1)
    R_NEG      (+1, -1,  0)      R_NEG       (+1, -2, +1)
    R_POS      (-1, +1,  0)      R_POS       (-1, +2, -1)
    S_NEG      ( 0, +1, -1)      S_NEG       (+1, +1, -2)
    S_POS      ( 0, -1, +1)      S_POS       (-1, -1, +2)
    NONE       ( 0,  0,  0)      NONE        ( 0,  0,  0)

Odległość między hexami:
    distance = (|dq| + |dr| + |dq + dr|) >> 1

Przykład użycia:
    >>> a = Axial(0, 0)
    >>> b = Axial(2, 1)
    >>> a.distance(b)
    3
    >>> a.neighbor(Direction.Q_POS)
    Axial(q=1, r=0)
    >>> Axial.line(a, Axial(3, 0))
    [Axial(q=0, r=0), Axial(q=1, r=0), Axial(q=2, r=0), Axial(q=3, r=0)]
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import math
from typing import List, Set


@dataclass(frozen=True)
class Cuboid:
    """
    Współrzędna cube (q, r, s) z niezmiennikiem q + r + s = 0.

    Attributes:
        q (int): Oś q
        r (int): Oś r
        s (int): Oś s
    """
    q: int
    r: int
    s: int

    def abs(self) -> Cuboid:
        """Wartość bezwzględna każdej osi (wynik nie spełnia q + r + s = 0)."""
        return Cuboid(abs(self.q), abs(self.r), abs(self.s))

    def length(self) -> int:
        """
        Długość wektora w krokach hex.

        Returns:
            int: (|q| + |r| + |s|) >> 1
        """
        return (abs(self.q) + abs(self.r) + abs(self.s)) >> 1

    def direction(self) -> Direction:
        """
        Dominujący kierunek wektora.

        Wybiera oś o największej wartości bezwzględnej. Remisy
        rozstrzygane są w kolejności: q, potem r, potem s.

        Returns:
            Direction: Kierunek ze znakiem dominującej osi
        """
        a = self.abs()
        if a.q >= a.r and a.q >= a.s:
            return Direction.Q_NEG if self.q < 0 else Direction.Q_POS
        if a.r >= a.s:
            return Direction.R_NEG if self.r < 0 else Direction.R_POS
        return Direction.S_NEG if self.s < 0 else Direction.S_POS


class Direction(Enum):
    """Sześć kierunków do sąsiednich komórek (plus NONE)."""

    Q_NEG = (-1, 0, 1)
    Q_POS = (1, 0, -1)
    R_NEG = (1, -1, 0)
    R_POS = (-1, 1, 0)
    S_NEG = (0, 1, -1)
    S_POS = (0, -1, 1)
    NONE = (0, 0, 0)

    def delta(self) -> Cuboid:
        """Przesunięcie w cube odpowiadające kierunkowi."""
        return Cuboid(*self.value)


class Diagonal(Enum):
    """Sześć kierunków do komórek po przekątnej (plus NONE)."""

    Q_NEG = (-2, 1, 1)
    Q_POS = (2, -1, -1)
    R_NEG = (1, -2, 1)
    R_POS = (-1, 2, -1)
    S_NEG = (1, 1, -2)
    S_POS = (-1, -1, 2)
    NONE = (0, 0, 0)

    def delta(self) -> Cuboid:
        """Przesunięcie w cube odpowiadające przekątnej."""
        return Cuboid(*self.value)


# Kolejność sąsiadów zwracanych przez Axial.neighbors()
DIRECTIONS: List[Direction] = [
    Direction.Q_NEG,
    Direction.Q_POS,
    Direction.R_NEG,
    Direction.R_POS,
    Direction.S_NEG,
    Direction.S_POS,
]


@dataclass(frozen=True)
class Axial:
    """
    Współrzędna hexagonalna w systemie axial (q, r).

    Klasa jest niemutowalna (frozen=True).
    Może być używana jako klucz w słowniku lub element zbioru.

    Attributes:
        q (int): Współrzędna kolumny
        r (int): Współrzędna wiersza

    Note:
        Współrzędna s w systemie cube jest wyliczana jako: s = -q - r
    """
    q: int
    r: int

    # ─────────────────────────────────────────────────────────────────────────
    # WŁAŚCIWOŚCI
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def s(self) -> int:
        """Trzecia współrzędna w systemie cube."""
        return -self.q - self.r

    @property
    def cube(self) -> Cuboid:
        """Konwersja do współrzędnych cube."""
        return Cuboid(self.q, self.r, self.s)

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚĆ
    # ─────────────────────────────────────────────────────────────────────────

    def delta(self, other: Axial) -> Cuboid:
        """
        Różnica self - other w współrzędnych cube.

        Args:
            other: Komórka odejmowana

        Returns:
            Cuboid: Wektor od other do self
        """
        q = self.q - other.q
        r = self.r - other.r
        return Cuboid(q, r, -q - r)

    def distance(self, other: Axial) -> int:
        """
        Oblicza odległość w krokach hex między dwoma komórkami.

        Wzór:
            distance = (|dq| + |dr| + |dq + dr|) >> 1

        Args:
            other: Druga komórka

        Returns:
            int: Odległość (symetryczna, 0 tylko dla tej samej komórki)

        Example:
            >>> Axial(0, 0).distance(Axial(2, 1))
            3
        """
        dq = self.q - other.q
        dr = self.r - other.r
        return (abs(dq) + abs(dr) + abs(dq + dr)) >> 1

    # ─────────────────────────────────────────────────────────────────────────
    # SĄSIEDZI
    # ─────────────────────────────────────────────────────────────────────────

    def neighbor(self, direction: Direction) -> Axial:
        """
        Zwraca sąsiada w podanym kierunku.

        Args:
            direction: Kierunek (Direction.NONE zwraca self)

        Returns:
            Axial: Sąsiednia komórka
        """
        d = direction.delta()
        return Axial(self.q + d.q, self.r + d.r)

    def diagonal(self, diagonal: Diagonal) -> Axial:
        """
        Zwraca komórkę po przekątnej (odległość 2).

        Args:
            diagonal: Przekątna (Diagonal.NONE zwraca self)

        Returns:
            Axial: Komórka po przekątnej
        """
        d = diagonal.delta()
        return Axial(self.q + d.q, self.r + d.r)

    def neighbors(self) -> List[Axial]:
        """Zwraca 6 sąsiadów w kolejności DIRECTIONS."""
        return [self.neighbor(d) for d in DIRECTIONS]

    # ─────────────────────────────────────────────────────────────────────────
    # LINIA
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def line(a: Axial, b: Axial) -> List[Axial]:
        """
        Zwraca komórki tworzące linię prostą od a do b (włącznie).

        Interpolacja liniowa w przestrzeni cube w n = distance(a, b)
        krokach, każdy punkt zaokrąglony przez round_to_axial.
        Jeśli zaokrąglenie trafi w już odwiedzoną komórkę, punkt jest
        przesuwany o jedną komórkę w dominującym kierunku (b - a),
        aż trafi w nową. Na końcu dołączane jest b, jeśli go brak.

        Args:
            a: Początek linii
            b: Koniec linii

        Returns:
            List[Axial]: n + 1 różnych komórek, pierwsza a, ostatnia b

        Example:
            >>> Axial.line(Axial(0, 0), Axial(0, 2))
            [Axial(q=0, r=0), Axial(q=0, r=1), Axial(q=0, r=2)]
        """
        n = a.distance(b)
        if n == 0:
            return [a]

        step = b.delta(a).direction()

        ax, ay, az = float(a.q), float(a.s), float(a.r)
        x, y, z = float(b.q) - ax, float(b.s) - ay, float(b.r) - az

        result: List[Axial] = []
        visited: Set[Axial] = set()

        for h in range(n):
            t = h / n
            pnt = round_to_axial(ax + x * t, ay + y * t, az + z * t)
            while pnt in visited:
                pnt = pnt.neighbor(step)
            result.append(pnt)
            visited.add(pnt)

        if b not in visited:
            result.append(b)

        return result

    def line_to(self, other: Axial) -> List[Axial]:
        """Skrót dla Axial.line(self, other)."""
        return Axial.line(self, other)

    # ─────────────────────────────────────────────────────────────────────────
    # OPERATORY ARYTMETYCZNE
    # ─────────────────────────────────────────────────────────────────────────

    def __add__(self, other: Axial) -> Axial:
        """Dodawanie współrzędnych."""
        return Axial(self.q + other.q, self.r + other.r)

    def __sub__(self, other: Axial) -> Axial:
        """Odejmowanie współrzędnych."""
        return Axial(self.q - other.q, self.r - other.r)

    def __mul__(self, scalar: int) -> Axial:
        """Mnożenie przez skalar."""
        return Axial(self.q * scalar, self.r * scalar)

    def __neg__(self) -> Axial:
        """Negacja (komórka przeciwna względem origin)."""
        return Axial(-self.q, -self.r)

    # ─────────────────────────────────────────────────────────────────────────
    # REPREZENTACJA
    # ─────────────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"Axial(q={self.q}, r={self.r})"

    def __str__(self) -> str:
        return f"({self.q}:{self.r})"


# ─────────────────────────────────────────────────────────────────────────────
# FUNKCJE POMOCNICZE
# ─────────────────────────────────────────────────────────────────────────────

def _round_half_away(value: float) -> float:
    """Zaokrąglenie do całkowitej, połówki od zera (0.5 -> 1, -0.5 -> -1)."""
    whole = math.trunc(value)
    if abs(value - whole) >= 0.5:
        whole += 1 if value > 0 else -1
    return float(whole)


def round_to_axial(x: float, y: float, z: float) -> Axial:
    """
    Zaokrągla ułamkowe współrzędne cube do najbliższej komórki.

    Kolejność osi: x = q, y = s, z = r.

    Algorytm:
    1. Zaokrąglij każdą współrzędną (połówki od zera)
    2. Policz błędy zaokrąglenia dx, dy, dz
    3. Skoryguj oś z największym błędem tak, żeby suma była 0:
       - dx > dz i dx > dy  -> x = -z - y
       - w przeciwnym razie dz > dy -> z = -x - y
       - w przeciwnym razie y = -x - z

    Kolejność porównań rozstrzyga remisy i wpływa na wynik
    Axial.line oraz Layout.ring_for - nie wolno jej zmieniać.

    Args:
        x, y, z: Współrzędne cube (float) w kolejności q, s, r

    Returns:
        Axial: Najbliższa komórka
    """
    rx = _round_half_away(x)
    ry = _round_half_away(y)
    rz = _round_half_away(z)

    dx = abs(rx - x)
    dy = abs(ry - y)
    dz = abs(rz - z)

    if dx > dz and dx > dy:
        rx = -rz - ry
    elif dz > dy:
        rz = -rx - ry
    else:
        ry = -rx - rz

    return Axial(int(rx), int(rz))


def axial_from_cube(q: int, r: int, s: int) -> Axial:
    """
    Tworzy Axial ze współrzędnych cube.

    Raises:
        ValueError: Jeśli q + r + s != 0
    """
    if q + r + s != 0:
        raise ValueError(f"Invalid cube coordinates: {q} + {r} + {s} != 0")
    return Axial(q, r)
