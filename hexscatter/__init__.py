"""
hexscatter - deterministyczne rozmieszczanie punktów zainteresowania
na mapie hexagonalnej.

Pakiety:
- core: współrzędne hex, Layout, HexMap, generator Shift64, konfiguracja
- scatter: generator punktów (blue noise) i zapis do tablicy węzłów
- events: log generacji i tabele zdarzeń kategorii
"""

__version__ = "1.0.0"
