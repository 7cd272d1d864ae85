"""
Log przebiegu generacji do formatu JSON.

Każde istotne zdarzenie generacji (przyjęcie punktu, odrzucenie,
przyciągnięcie do sąsiada, zapis węzła, scalenie regionów) jest
zapisywane z pełnym kontekstem. Log pozwala odtworzyć i zdebugować
rozmieszczenie punktów dla danego seeda.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    GENERATION_START
    ─────────────────────────────────────────────────────────────
    Początek przebiegu generacji (jeden logger = wiele przebiegów).
    Data: index, width, height; seed, radius i style w metadata["passes"]

    GENERATION_END
    ─────────────────────────────────────────────────────────────
    Koniec przebiegu, doliczany do summary.
    Data: points, placed, invalid

    POINT_ACCEPTED
    ─────────────────────────────────────────────────────────────
    Punkt przyjęty do zbioru.
    Data: point [x, y], distance

    POINT_REJECTED
    ─────────────────────────────────────────────────────────────
    Iteracja nie dała punktu (poza mapą lub za blisko sąsiada).
    Data: point [x, y], distance, reason

    POINT_RECENTERED
    ─────────────────────────────────────────────────────────────
    Kandydat za daleko od sąsiada - przyciągnięty do AVERAGE_RADIUS.
    Data: from [x, y], to [x, y], attractor [x, y]

    NODE_PLACED
    ─────────────────────────────────────────────────────────────
    Zapis kategorii i wartości do węzła.
    Data: key, value

    INVALID_PLACEMENT
    ─────────────────────────────────────────────────────────────
    Punkt trafił w komórkę, której nie ma w tablicy.
    To błąd wyliczania granic/przesunięcia, nie normalna sytuacja.
    Data: point [x, y]

    REGION_COLLECT / COLLECT_SKIPPED
    ─────────────────────────────────────────────────────────────
    Scalenie pod-regionu / węzeł rzutowany poza region rodzica.

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "seed": 12345,
        "timestamp": "2024-01-01T12:00:00",
        "passes": [{"radius": 12, "style": "POINTY", "seed": 12345}]
    },
    "events": [
        {"step": 0, "type": "POINT_ACCEPTED", "hex": [1, -2], "data": {...}},
        ...
    ],
    "summary": {
        "points": 41,
        "placed": 41,
        "invalid": 0,
        "passes": 1
    }
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING
from datetime import datetime
import json
from pathlib import Path

if TYPE_CHECKING:
    from ..core.hex_coord import Axial


class EventType(Enum):
    """Typ zdarzenia generacji."""

    # Przebieg
    GENERATION_START = auto()
    GENERATION_END = auto()

    # Punkty
    POINT_ACCEPTED = auto()
    POINT_REJECTED = auto()
    POINT_RECENTERED = auto()

    # Węzły
    NODE_PLACED = auto()
    INVALID_PLACEMENT = auto()

    # Regiony
    REGION_COLLECT = auto()
    COLLECT_SKIPPED = auto()


@dataclass
class GenerationEvent:
    """
    Pojedyncze zdarzenie generacji.

    Attributes:
        step (int): Numer iteracji (lub indeks punktu w fazie zapisu)
        event_type (EventType): Typ zdarzenia
        hex (Optional[Axial]): Komórka, której dotyczy zdarzenie
        data (Dict): Dodatkowe dane specyficzne dla typu
    """
    step: int
    event_type: EventType
    hex: Optional["Axial"] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result: Dict[str, Any] = {
            "step": self.step,
            "type": self.event_type.name,
        }

        if self.hex is not None:
            result["hex"] = [self.hex.q, self.hex.r]
        if self.data:
            result["data"] = self.data

        return result


class EventLogger:
    """
    Logger zdarzeń generacji.

    Zbiera wszystkie zdarzenia i może je zapisać do pliku JSON.

    Attributes:
        events (List[GenerationEvent]): Lista zdarzeń
        metadata (Dict): Metadane przebiegu
        summary (Dict): Podsumowanie (uzupełniane na końcu)

    Example:
        >>> logger = EventLogger(seed=12345)
        >>> logger.log_point_accepted(0, Axial(1, 0), (10, 20), 140.2)
        >>> logger.save("output/scatter_12345.json")
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Inicjalizuje logger.

        Args:
            seed: Ziarno przebiegu generacji (None = ziarno pierwszego przebiegu)
        """
        self.events: List[GenerationEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "seed": seed,
            "timestamp": datetime.now().isoformat(),
        }
        self.summary: Dict[str, Any] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: GenerationEvent) -> None:
        """Dodaje zdarzenie do logu."""
        self.events.append(event)

    def log_event(
        self,
        step: int,
        event_type: EventType,
        hex: Optional["Axial"] = None,
        **data: Any,
    ) -> GenerationEvent:
        """
        Tworzy i loguje zdarzenie.

        Args:
            step: Numer iteracji
            event_type: Typ zdarzenia
            hex: Komórka (opcjonalnie)
            **data: Dodatkowe dane

        Returns:
            GenerationEvent: Utworzone zdarzenie
        """
        event = GenerationEvent(
            step=step,
            event_type=event_type,
            hex=hex,
            data=dict(data),
        )
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE METODY LOGOWANIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_generation_start(
        self,
        radius: int,
        style: str,
        width: int,
        height: int,
        seed: Optional[int] = None,
    ) -> None:
        """
        Loguje start przebiegu.

        Jeden logger może obsłużyć wiele przebiegów (np. kolejne regiony):
        każdy dopisuje wpis do metadata["passes"].
        """
        passes = self.metadata.setdefault("passes", [])
        passes.append({"radius": radius, "style": style, "seed": seed})
        if self.metadata["seed"] is None:
            self.metadata["seed"] = seed
        self.log_event(
            0, EventType.GENERATION_START, index=len(passes) - 1, width=width, height=height
        )

    def log_generation_end(self, step: int, points: int, placed: int, invalid: int) -> None:
        """Loguje koniec przebiegu i dolicza go do podsumowania."""
        totals = {"points": points, "placed": placed, "invalid": invalid}
        for key, value in totals.items():
            self.summary[key] = self.summary.get(key, 0) + value
        self.summary["passes"] = len(self.metadata.get("passes", []))
        self.log_event(step, EventType.GENERATION_END, **totals)

    def log_point_accepted(
        self,
        step: int,
        hex: "Axial",
        point: Sequence[int],
        distance: float,
    ) -> None:
        """Loguje przyjęcie punktu."""
        self.log_event(
            step,
            EventType.POINT_ACCEPTED,
            hex=hex,
            point=list(point),
            distance=round(distance, 2),
        )

    def log_point_rejected(
        self,
        step: int,
        point: Sequence[int],
        distance: float,
        reason: str,
    ) -> None:
        """Loguje odrzucenie kandydata."""
        self.log_event(
            step,
            EventType.POINT_REJECTED,
            point=list(point),
            distance=round(distance, 2),
            reason=reason,
        )

    def log_point_recentered(
        self,
        step: int,
        from_point: Sequence[int],
        to_point: Sequence[int],
        attractor: Sequence[int],
    ) -> None:
        """Loguje przyciągnięcie kandydata do sąsiada."""
        self.log_event(
            step,
            EventType.POINT_RECENTERED,
            **{"from": list(from_point), "to": list(to_point), "attractor": list(attractor)},
        )

    def log_node_placed(self, step: int, hex: "Axial", key: str, value: int) -> None:
        """Loguje zapis węzła."""
        self.log_event(step, EventType.NODE_PLACED, hex=hex, key=key, value=value)

    def log_invalid_placement(self, step: int, hex: "Axial", point: Sequence[int]) -> None:
        """Loguje punkt, który trafił poza tablicę węzłów."""
        self.log_event(step, EventType.INVALID_PLACEMENT, hex=hex, point=list(point))

    def log_collect(self, merged: int, total: int) -> None:
        """Loguje scalenie pod-regionu."""
        self.log_event(0, EventType.REGION_COLLECT, merged=merged, total=total)

    def log_collect_skipped(self, source: "Axial", target: "Axial") -> None:
        """Loguje węzeł rzutowany poza region rodzica."""
        self.log_event(0, EventType.COLLECT_SKIPPED, hex=target, source=[source.q, source.r])

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje cały log do słownika.

        Returns:
            Dict: Pełny log w formacie dla JSON
        """
        return {
            "metadata": self.metadata,
            "events": [e.to_dict() for e in self.events],
            "summary": self.summary,
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Args:
            filepath: Ścieżka do pliku
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """
        Zwraca log jako string JSON.

        Args:
            indent: Wcięcie (None = compact)
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # STATYSTYKI
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        """Zwraca liczbę zdarzeń."""
        return len(self.events)

    def get_events_by_type(self, event_type: EventType) -> List[GenerationEvent]:
        """Filtruje zdarzenia po typie."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_for_hex(self, hex: "Axial") -> List[GenerationEvent]:
        """Filtruje zdarzenia dla komórki."""
        return [e for e in self.events if e.hex == hex]
