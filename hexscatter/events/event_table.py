"""
Tabele zdarzeń dla kategorii węzłów.

Gdy gracz wchodzi na komórkę, jej kategoria (EventKey) wybiera
tabelę, a seed wejścia losuje konkretne zdarzenie:

    rng = Shift64(seed)
    if rng.next_int(256) > threshold:
        zdarzenie = entries[rng.next_index(len(entries) - 1) + 1]
    else:
        zdarzenie = entries[0]        # wynik "pusty"

Domyślne progi (im niższy, tym częściej coś się dzieje):
    COMBAT  92
    ENERGY  48
    MINING  24

Tabele i etykiety akcji są wczytywane z events.yaml przez ConfigLoader.

Przykład użycia:
    >>> table = EventTable.from_config(loader.load_event_tables())
    >>> info = table.roll(EventKey.ENERGY, seed=1234)
    >>> info.key
    <EventKey.ENERGY: 3>
    >>> table.get_actions(EventKey.ENERGY).enter
    'harvest'
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List

from ..core.hex_map import EventKey
from ..core.rng import Shift64


@dataclass(frozen=True)
class EventInfo:
    """
    Jedno zdarzenie z tabeli.

    Attributes:
        key (EventKey): Kategoria tabeli
        title (str): Nazwa zdarzenia
        descr (str): Opis
        enter (bool): Czy można "wejść" w zdarzenie
        amount (int): Wielkość (wrogowie / energia / materiał)
        is_large (bool): Duży wariant zdarzenia
    """
    key: EventKey
    title: str
    descr: str
    enter: bool = False
    amount: int = 0
    is_large: bool = False

    @classmethod
    def from_dict(cls, key: EventKey, data: Dict[str, Any]) -> EventInfo:
        """Tworzy EventInfo z wpisu YAML."""
        return cls(
            key=key,
            title=str(data["title"]),
            descr=str(data.get("descr", "")),
            enter=bool(data.get("enter", False)),
            amount=int(data.get("amount", 0)),
            is_large=bool(data.get("is_large", False)),
        )


@dataclass(frozen=True)
class EventAction:
    """Etykiety przycisków wejścia/wyjścia dla kategorii."""
    enter: str = "enter"
    leave: str = "leave"


class EventTable:
    """
    Zestaw tabel zdarzeń dla wszystkich kategorii.

    Attributes:
        entries (Dict[EventKey, List[EventInfo]]): Wpisy tabel
        thresholds (Dict[EventKey, int]): Progi losowania
        actions (Dict[EventKey, EventAction]): Etykiety akcji
    """

    def __init__(
        self,
        entries: Dict[EventKey, List[EventInfo]],
        thresholds: Dict[EventKey, int],
        actions: Dict[EventKey, EventAction],
    ):
        for key, items in entries.items():
            if not items:
                raise ValueError(f"Event table '{key.name.lower()}' has no entries")
        self.entries = entries
        self.thresholds = thresholds
        self.actions = actions

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> EventTable:
        """
        Buduje tabele z zawartości events.yaml.

        Args:
            config: Słownik z sekcjami `tables` i `actions`

        Returns:
            EventTable: Gotowe tabele

        Raises:
            ValueError: Jeśli nazwa tabeli nie odpowiada EventKey
        """
        entries: Dict[EventKey, List[EventInfo]] = {}
        thresholds: Dict[EventKey, int] = {}
        actions: Dict[EventKey, EventAction] = {}

        for name, table in config.get("tables", {}).items():
            key = _parse_key(name)
            entries[key] = [EventInfo.from_dict(key, e) for e in table.get("entries", [])]
            thresholds[key] = int(table.get("threshold", 0))

        for name, labels in config.get("actions", {}).items():
            actions[_parse_key(name)] = EventAction(**labels)

        return cls(entries, thresholds, actions)

    # ─────────────────────────────────────────────────────────────────────────
    # LOSOWANIE
    # ─────────────────────────────────────────────────────────────────────────

    def roll(self, key: EventKey, seed: int) -> EventInfo:
        """
        Losuje zdarzenie z tabeli kategorii.

        Każde losowanie tworzy własny Shift64(seed), więc wynik zależy
        tylko od kategorii i seeda.

        Args:
            key: Kategoria komórki
            seed: Seed wejścia na komórkę

        Returns:
            EventInfo: Wylosowane zdarzenie

        Raises:
            KeyError: Jeśli brak tabeli dla kategorii
        """
        if key not in self.entries:
            raise KeyError(f"No event table for {key.name}")

        items = self.entries[key]
        rng = Shift64(seed)
        if rng.next_int(256) > self.thresholds.get(key, 0) and len(items) > 1:
            return items[rng.next_index(len(items) - 1) + 1]
        return items[0]

    def get_actions(self, key: EventKey) -> EventAction:
        """Etykiety akcji dla kategorii (domyślne enter/leave)."""
        return self.actions.get(key, EventAction())


def _parse_key(name: str) -> EventKey:
    try:
        return EventKey[name.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown event key: {name!r}") from None
