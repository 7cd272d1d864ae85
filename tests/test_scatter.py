"""
Testy dla generatora scatter.

Testuje:
- Odstępy między punktami (>= MIN_RADIUS)
- Punkty tylko w komórkach regionu (brak INVALID_PLACEMENT)
- Przyciąganie do AVERAGE_RADIUS
- Determinizm dla tego samego seeda
- Przypadki brzegowe (iterations = 0, promień 0)
- Walidację ScatterConfig
- populate_regions + collect
"""

import itertools
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexscatter.core.hex_coord import Axial
from hexscatter.core.hex_map import EventKey, HexMap
from hexscatter.core.layout import SQRT3, Style, Vec2
from hexscatter.core.rng import Shift64, seed_from
from hexscatter.events.event_logger import EventLogger, EventType
from hexscatter.scatter.generator import (
    InvalidPlacementError,
    Point,
    ScatterConfig,
    ScatterGenerator,
)


SEED = seed_from("near")


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

def _make_map(radius=12, style=Style.POINTY, origin=Vec2(0, 0)):
    hex_map = HexMap(Vec2(64.0, 64.0), style, origin, radius)
    hex_map.spawn_entities()
    return hex_map


@pytest.fixture
def hex_map():
    """Region o domyślnych parametrach (POINTY, 64 px, promień 12)."""
    return _make_map()


@pytest.fixture
def generator():
    """Generator w trybie strict z własnym logiem."""
    return ScatterGenerator(ScatterConfig(), logger=EventLogger(seed=SEED), strict=True)


def _last_by_hex(placements):
    result = {}
    for p in placements:
        result[p.hex] = p
    return result


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ODSTĘPY I ZASIĘG
# ═══════════════════════════════════════════════════════════════════════════

def test_points_respect_min_radius(generator, hex_map):
    """Żadne dwa punkty nie leżą bliżej niż MIN_RADIUS."""
    points = generator.generate(Shift64(SEED), hex_map)

    assert len(points) > 1
    for a, b in itertools.combinations(points, 2):
        assert a.distance(b) >= generator.config.min_radius


@pytest.mark.parametrize("style", [Style.FLAT, Style.POINTY])
def test_all_placements_on_grid(style):
    """Każdy punkt trafia w komórkę regionu, tryb strict nie rzuca."""
    hex_map = _make_map(radius=8, style=style, origin=Vec2(300.0, -120.0))
    generator = ScatterGenerator(strict=True)

    placements = generator.spawn_points(Shift64(SEED), hex_map)

    assert placements
    assert generator.invalid_count == 0
    assert not generator.logger.get_events_by_type(EventType.INVALID_PLACEMENT)
    for p in placements:
        assert hex_map.on_grid(p.hex)
        assert p.hex in hex_map


def test_recentered_points_within_average(generator, hex_map):
    """Przyciągnięty kandydat leży nie dalej niż AVERAGE_RADIUS od sąsiada."""
    generator.generate(Shift64(SEED), hex_map)

    recentered = generator.logger.get_events_by_type(EventType.POINT_RECENTERED)
    for event in recentered:
        moved = Point(*event.data["to"])
        attractor = Point(*event.data["attractor"])
        assert moved.distance(attractor) <= generator.config.average_radius


def test_pull_towards_truncates():
    """Przesunięcie jest obcinane w stronę sąsiada."""
    generator = ScatterGenerator()
    moved = generator.pull_towards(Point(256, 0), Point(0, 0), 256.0)
    assert moved == Point(128, 0)

    moved = generator.pull_towards(Point(-301, 401), Point(1, 1), 500.0)
    assert moved.distance(Point(1, 1)) <= 128.0


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZAPIS DO TABLICY
# ═══════════════════════════════════════════════════════════════════════════

def test_nodes_match_placements(generator, hex_map):
    """Węzły regionu mają kategorię i wartość ostatniego punktu w komórce."""
    placements = generator.spawn_points(Shift64(SEED), hex_map)

    for hex, p in _last_by_hex(placements).items():
        assert p.key in (EventKey.ENERGY, EventKey.MINING)
        assert 1 <= p.value <= generator.config.value_range
        assert hex_map.get_event_key(hex) == p.key
        assert hex_map.get_value(hex) == p.value
        assert p.center == hex_map.layout.center_for(hex)


def test_untouched_cells_stay_empty(generator, hex_map):
    """Komórki bez punktu zostają NONE."""
    placements = generator.spawn_points(Shift64(SEED), hex_map)
    used = {p.hex for p in placements}

    for hex in hex_map.nodes:
        if hex not in used:
            assert hex_map.get_event_key(hex) == EventKey.NONE


def test_on_place_callback_sets_entity(generator, hex_map):
    """Obiekt zwrócony przez callback trafia do entity węzła."""
    placements = generator.spawn_points(
        Shift64(SEED), hex_map, on_place=lambda p: f"poi-{p.point.x}-{p.point.y}"
    )

    for hex, p in _last_by_hex(placements).items():
        assert hex_map.get_entity(hex) == f"poi-{p.point.x}-{p.point.y}"


def test_missing_node_is_invalid_placement():
    """Region bez spawn_entities: każdy punkt to INVALID_PLACEMENT."""
    hex_map = HexMap(Vec2(64.0, 64.0), Style.POINTY, Vec2(0, 0), 4)

    lenient = ScatterGenerator()
    assert lenient.spawn_points(Shift64(SEED), hex_map) == []
    assert lenient.invalid_count > 0
    assert lenient.logger.summary["invalid"] == lenient.invalid_count

    strict = ScatterGenerator(strict=True)
    with pytest.raises(InvalidPlacementError):
        strict.spawn_points(Shift64(SEED), hex_map)


def test_summary_logged(generator, hex_map):
    """Log zawiera start, koniec i podsumowanie."""
    placements = generator.spawn_points(Shift64(SEED), hex_map)
    logger = generator.logger

    assert len(logger.get_events_by_type(EventType.GENERATION_START)) == 1
    assert len(logger.get_events_by_type(EventType.GENERATION_END)) == 1
    assert logger.summary["placed"] == len(placements)
    assert logger.metadata["seed"] == SEED
    assert len(logger.get_events_by_type(EventType.NODE_PLACED)) == len(placements)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DETERMINIZM
# ═══════════════════════════════════════════════════════════════════════════

def test_same_seed_same_points(hex_map):
    """Ten sam seed i parametry = te same punkty i kategorie."""
    a = ScatterGenerator().spawn_points(Shift64(SEED), hex_map)
    b = ScatterGenerator().spawn_points(Shift64(SEED), _make_map())
    assert a == b


def test_different_seed_different_points(hex_map):
    """Inny seed daje inny zbiór punktów."""
    a = ScatterGenerator().generate(Shift64(1), hex_map)
    b = ScatterGenerator().generate(Shift64(2), hex_map)
    assert a != b


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PRZYPADKI BRZEGOWE
# ═══════════════════════════════════════════════════════════════════════════

def test_zero_iterations_gives_empty_set(hex_map):
    """iterations = 0 -> brak punktów i brak zmian w tablicy."""
    generator = ScatterGenerator(ScatterConfig(iterations=0))
    assert generator.generate(Shift64(SEED), hex_map) == []
    assert generator.spawn_points(Shift64(SEED), hex_map) == []
    assert all(node.key == EventKey.NONE for node in hex_map.nodes.values())


def test_single_cell_region():
    """Region o promieniu 0: wszystkie punkty w komórce (0, 0)."""
    hex_map = _make_map(radius=0)
    generator = ScatterGenerator(strict=True)

    placements = generator.spawn_points(Shift64(SEED), hex_map)

    assert len(placements) >= 1
    assert all(p.hex == Axial(0, 0) for p in placements)


def test_bounds():
    """Prostokąt generacji: hex_size * (2R + 1) - margines."""
    generator = ScatterGenerator()
    width, height = generator.bounds(_make_map(radius=2))
    assert width == int(SQRT3 * 64.0 * 5) - 4
    assert height == 128 * 5 - 4


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KONFIGURACJA
# ═══════════════════════════════════════════════════════════════════════════

def test_config_defaults():
    """Domyślne promienie i liczba iteracji."""
    config = ScatterConfig()
    assert (config.min_radius, config.average_radius, config.max_radius) == (96.0, 128.0, 192.0)
    assert config.iterations == 96
    assert config.max_checks == 32


@pytest.mark.parametrize("kwargs", [
    {"min_radius": 0},
    {"min_radius": 200.0},
    {"average_radius": 300.0},
    {"iterations": -1},
    {"max_checks": -5},
    {"value_range": 0},
])
def test_config_validation(kwargs):
    """Niepoprawne parametry rzucają ValueError."""
    with pytest.raises(ValueError):
        ScatterConfig(**kwargs)


def test_config_from_dict_ignores_unknown_keys():
    """from_dict pomija klucze spoza konfiguracji (np. id profilu)."""
    config = ScatterConfig.from_dict({"id": "dense", "min_radius": 64, "average_radius": 96,
                                      "max_radius": 128})
    assert config.min_radius == 64
    assert config.iterations == 96


# ═══════════════════════════════════════════════════════════════════════════
# TEST: WIELE REGIONÓW
# ═══════════════════════════════════════════════════════════════════════════

def test_populate_regions_collects_into_parent():
    """Pod-regiony są wypełniane z jednego generatora i scalane do rodzica."""
    parent = _make_map(radius=12)
    regions = [
        HexMap(Vec2(64.0, 64.0), Style.POINTY, parent.layout.center_for(Axial(-5, 0)), 3),
        HexMap(Vec2(64.0, 64.0), Style.POINTY, parent.layout.center_for(Axial(5, 0)), 3),
    ]
    generator = ScatterGenerator(strict=True)

    placements = generator.populate_regions(Shift64(SEED), parent, regions)

    assert placements
    for region in regions:
        assert len(region) == 37
        for hex, node in region.nodes.items():
            target = parent.layout.hex_for(region.layout.center_for(hex))
            assert parent.get_event_key(target) == node.key
            assert parent.get_value(target) == node.value

    assert len(generator.logger.get_events_by_type(EventType.REGION_COLLECT)) == 2
    assert generator.logger.summary["passes"] == 2
    assert generator.logger.summary["placed"] == len(placements)
    assert generator.logger.metadata["seed"] == SEED


def test_populate_regions_deterministic():
    """Ta sama kolejność regionów i seed = ten sam wynik."""
    def run():
        parent = _make_map(radius=12)
        regions = [
            HexMap(Vec2(64.0, 64.0), Style.POINTY, parent.layout.center_for(hex), 2)
            for hex in (Axial(0, -6), Axial(0, 6))
        ]
        ScatterGenerator().populate_regions(Shift64(SEED), parent, regions)
        return {hex: (node.key, node.value) for hex, node in parent.nodes.items()}

    assert run() == run()
