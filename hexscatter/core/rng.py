"""
Deterministyczny generator liczb losowych xorshift64 (Shift64).

Generowanie mapy musi być w pełni powtarzalne - ten sam seed
zawsze daje te same punkty, te same kategorie i te same wartości.
To pozwala na:
- Odtwarzanie regionów bez zapisywania ich zawartości
- Porównywanie wyników z zapisanymi wektorami testowymi
- Debugowanie rozmieszczenia punktów

Stan generatora to JEDNA 64-bitowa liczba ze znakiem.
Cała arytmetyka jest "wrapping" (przepełnienie zawija się po cichu,
nigdy nie jest błędem) - w Pythonie emulujemy to maską 64 bitów.

TRANSFORMACJA:
═══════════════════════════════════════════════════════════════════

    x ^= x >> 12        (przesunięcie arytmetyczne)
    x ^= x << 25        (obcięte do 64 bitów)
    x ^= x >> 27
    x *= 0x2345F4914F6CFD1E

LOSOWANIE Z ZAKRESU:
═══════════════════════════════════════════════════════════════════

    x = shift() / 2^63          # ułamek ze znakiem w [-1, 1)
    v = |x * n| - 1.0

    next_int(n)   -> v obcięte w stronę zera, nasycone do int32
    next_index(n) -> v obcięte w stronę zera, nasycone do >= 0
    next_float(n) -> v zaokrąglone do pojedynczej precyzji

    Dla liczb całkowitych wynik leży w [0, n-1].

Jak używać:
    - Każdy przebieg generacji ma WŁASNĄ instancję Shift64
    - Generator przekazujemy jawnie do każdego wywołania
    - Kolejność losowań jest częścią kontraktu determinizmu

Przykład użycia:
    >>> rng = Shift64(0)
    >>> rng.state
    5036377382042008862
    >>> rng.shift()
    -6399782287330682226
    >>> seed_from("near")
    -4661580130154814320
"""

from __future__ import annotations
import hashlib
import struct


MULTIPLIER = 0x2345F4914F6CFD1E

_MASK_64 = (1 << 64) - 1
_SIGN_64 = 1 << 63
_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1

# 2^63 - dzielnik zamieniający stan na ułamek w [-1, 1)
_SCALE = 9223372036854775808.0


def wrap_i64(value: int) -> int:
    """
    Obcina liczbę do 64 bitów i interpretuje ją jako liczbę ze znakiem.

    Args:
        value: Dowolna liczba całkowita

    Returns:
        int: Wartość w zakresie [-2^63, 2^63 - 1]
    """
    value &= _MASK_64
    if value & _SIGN_64:
        return value - (1 << 64)
    return value


def _mix(x: int) -> int:
    """Jeden krok xorshift + mnożenie (wrapping)."""
    x ^= x >> 12
    x = wrap_i64(x ^ (x << 25))
    x ^= x >> 27
    return wrap_i64(x * MULTIPLIER)


def _to_float32(value: float) -> float:
    """Zaokrągla liczbę do najbliższej wartości pojedynczej precyzji."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


class Shift64:
    """
    Generator xorshift64 ze stałym mnożnikiem.

    Konstruktor wykonuje jeden krok "rozgrzewający" na seedzie
    (seed + 1, potem transformacja), więc seed 0 jest poprawny.

    Attributes:
        seed (int): Ziarno przekazane przy tworzeniu
        _state (int): Aktualny 64-bitowy stan ze znakiem

    Example:
        >>> a = Shift64(42)
        >>> b = Shift64(42)
        >>> a.shift() == b.shift()  # ten sam seed = te same wyniki
        True
    """

    def __init__(self, seed: int):
        """
        Tworzy nowy generator z podanym seedem.

        Args:
            seed: Ziarno (traktowane jako 64-bit ze znakiem)
        """
        self.seed = wrap_i64(seed)
        self._state = _mix(wrap_i64(self.seed + 1))

    # ─────────────────────────────────────────────────────────────────────────
    # PODSTAWOWE METODY
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> int:
        """Aktualny stan generatora (int64)."""
        return self._state

    def shift(self) -> int:
        """
        Przesuwa generator o jeden krok.

        Returns:
            int: Nowy stan (64-bit ze znakiem)
        """
        self._state = _mix(self._state)
        return self._state

    def _fraction(self, n: float) -> float:
        x = self.shift() / _SCALE
        return abs(x * float(n)) - 1.0

    # ─────────────────────────────────────────────────────────────────────────
    # LOSOWANIE Z ZAKRESU
    # ─────────────────────────────────────────────────────────────────────────

    def next_int(self, n: int) -> int:
        """
        Losuje liczbę całkowitą z przedziału [0, n-1].

        Args:
            n: Górna granica (wyłącznie), n > 0

        Returns:
            int: Wylosowana liczba (nasycona do zakresu int32)

        Example:
            >>> rng.next_int(256)  # liczba z [0, 255]
            205
        """
        value = int(self._fraction(n))
        return max(_INT32_MIN, min(_INT32_MAX, value))

    def next_index(self, n: int) -> int:
        """
        Losuje indeks z przedziału [0, n-1].

        Używane do wyboru elementu z listy.

        Args:
            n: Długość listy, n > 0

        Returns:
            int: Indeks (nigdy ujemny)
        """
        return max(0, int(self._fraction(n)))

    def next_float(self, n: float) -> float:
        """
        Losuje liczbę zmiennoprzecinkową z przedziału [-1.0, n-1.0).

        Wynik ma precyzję pojedynczą (float32), tak jak zapisane
        wektory testowe.

        Args:
            n: Skala losowania

        Returns:
            float: Wylosowana liczba
        """
        return _to_float32(self._fraction(n))

    # ─────────────────────────────────────────────────────────────────────────
    # POCHODNE GENERATORY
    # ─────────────────────────────────────────────────────────────────────────

    def fork(self) -> "Shift64":
        """
        Tworzy nowy generator z seedem wziętym z kolejnego losowania.

        Przydatne gdy pod-region ma mieć własną sekwencję, która
        nie przesuwa dalej głównego strumienia po rozwidleniu.

        Returns:
            Shift64: Nowy generator
        """
        return Shift64(self.shift())

    def __repr__(self) -> str:
        return f"Shift64(seed={self.seed}, state={self._state})"


# ─────────────────────────────────────────────────────────────────────────────
# SEED Z TEKSTU
# ─────────────────────────────────────────────────────────────────────────────

def seed_from(text: str) -> int:
    """
    Wylicza seed z tekstu (np. nazwy sektora podanej przez gracza).

    Algorytm:
    1. SHA-256 z tekstu w UTF-8
    2. Odczytaj cztery 8-bajtowe słowa big-endian
    3. Wymnóż je (wrapping 64-bit)
    4. Zinterpretuj wynik jako liczbę ze znakiem

    Args:
        text: Dowolny tekst

    Returns:
        int: Seed (int64)

    Example:
        >>> seed_from("")
        5698237097726351552
    """
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    words = struct.unpack(">4Q", digest)

    result = words[0]
    for word in words[1:]:
        result = (result * word) & _MASK_64

    return wrap_i64(result)
