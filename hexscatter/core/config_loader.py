"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Parametry generacji są trzymane w plikach YAML:
- defaults.yaml: parametry mapy, bazowe parametry scatter i profile
- events.yaml: tabele zdarzeń dla kategorii węzłów

Logika merge (uzupełniania defaults):
    1. Wczytaj sekcję `scatter` z defaults.yaml - wartości bazowe
    2. Wczytaj konkretny profil (np. "dense") z `scatter_profiles`
    3. Dla każdego klucza w bazie, którego brak w profilu:
       - Użyj wartości bazowej
    4. Profil może nadpisać bazę

Przykład:
    defaults.yaml:
        scatter:
            min_radius: 96
            average_radius: 128
            max_radius: 192
            iterations: 96

        scatter_profiles:
            dense:
                min_radius: 64     # nadpisuje bazę
                # average_radius nie podane -> 128 z bazy

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> dense = loader.load_scatter_profile("dense")
    >>> dense["iterations"]  # z bazy
    96
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, Optional
import yaml
import copy


class ConfigLoader:
    """
    Ładuje konfigurację z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        _defaults (Dict): Cache wczytanego defaults.yaml
        _events (Dict): Cache wczytanego events.yaml

    Example:
        >>> loader = ConfigLoader("data/")
        >>> loader.get_map_config()["radius"]
        12
    """

    def __init__(self, data_path: str = "data/"):
        """
        Inicjalizuje loader z ścieżką do danych.

        Args:
            data_path: Ścieżka do folderu z plikami YAML
        """
        self.data_path = Path(data_path)
        self._defaults: Optional[Dict] = None
        self._events: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Args:
            filename: Nazwa pliku (bez ścieżki)

        Returns:
            Dict: Zawartość pliku YAML

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """
        Zwraca zawartość defaults.yaml.

        Cache'uje wczytany plik - kolejne wywołania są szybkie.
        """
        if self._defaults is None:
            self._defaults = self._load_yaml("defaults.yaml")
        return self._defaults

    def get_map_config(self) -> Dict:
        """
        Zwraca parametry mapy.

        Returns:
            Dict: cell_size, style, radius, origin
        """
        return copy.deepcopy(self.get_defaults().get("map", {}))

    def get_scatter_config(self) -> Dict:
        """
        Zwraca bazowe parametry scatter.

        Returns:
            Dict: Sekcja scatter z defaults.yaml
        """
        return copy.deepcopy(self.get_defaults().get("scatter", {}))

    # ─────────────────────────────────────────────────────────────────────────
    # PROFILE SCATTER
    # ─────────────────────────────────────────────────────────────────────────

    def get_profile_ids(self) -> list[str]:
        """Zwraca listę nazw profili scatter."""
        return list(self.get_defaults().get("scatter_profiles", {}).keys())

    def load_scatter_profile(self, profile_id: str) -> Dict:
        """
        Wczytuje profil scatter z uzupełnionymi wartościami bazowymi.

        Args:
            profile_id: Nazwa profilu (klucz w scatter_profiles)

        Returns:
            Dict: Pełny zestaw parametrów scatter

        Raises:
            KeyError: Jeśli profil nie istnieje
        """
        profiles = self.get_defaults().get("scatter_profiles", {})

        if profile_id not in profiles:
            raise KeyError(f"Scatter profile '{profile_id}' not found in defaults.yaml")

        result = self._deep_merge(self.get_scatter_config(), profiles[profile_id] or {})
        result["id"] = profile_id

        return result

    # ─────────────────────────────────────────────────────────────────────────
    # TABELE ZDARZEŃ
    # ─────────────────────────────────────────────────────────────────────────

    def load_event_tables(self) -> Dict:
        """
        Wczytuje definicje tabel zdarzeń.

        Returns:
            Dict: Zawartość sekcji `tables` i `actions` z events.yaml
        """
        if self._events is None:
            self._events = self._load_yaml("events.yaml")
        return copy.deepcopy(self._events)

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """
        Czyści cache i wymusza ponowne wczytanie plików.

        Przydatne podczas strojenia parametrów w runtime.
        """
        self._defaults = None
        self._events = None
