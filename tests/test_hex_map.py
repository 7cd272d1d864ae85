"""
Testy dla HexMap.

Testuje:
- Liczbę i kształt komórek regionu
- on_grid i zapytania o komórki spoza tablicy
- set_node / clr_node
- spawn_entities z fabryką
- collect (scalanie pod-regionów)
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexscatter.core.hex_coord import Axial
from hexscatter.core.hex_map import CellHandle, EventKey, HexMap, HexNode
from hexscatter.core.layout import Style, Vec2
from hexscatter.events.event_logger import EventLogger, EventType


CELL = Vec2(64.0, 64.0)


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def small_map():
    """Region o promieniu 2 z utworzonymi węzłami."""
    hex_map = HexMap(CELL, Style.POINTY, Vec2(0, 0), 2)
    hex_map.spawn_entities()
    return hex_map


@pytest.fixture
def parent():
    """Region nadrzędny o promieniu 4."""
    hex_map = HexMap(CELL, Style.POINTY, Vec2(0, 0), 4)
    hex_map.spawn_entities()
    return hex_map


def _child_at(parent, hex, radius=1):
    """Pod-region o tej samej skali, ze środkiem w komórce rodzica."""
    child = HexMap(CELL, Style.POINTY, parent.layout.center_for(hex), radius)
    child.spawn_entities()
    return child


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KSZTAŁT REGIONU
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("radius,expected", [(0, 1), (1, 7), (2, 19), (12, 469)])
def test_cell_count(radius, expected):
    """Region o promieniu R ma 3R(R+1) + 1 komórek."""
    hex_map = HexMap(CELL, Style.FLAT, Vec2(0, 0), radius)
    handles = hex_map.spawn_entities()
    assert len(handles) == expected
    assert len(hex_map) == expected


def test_negative_radius_rejected():
    """Ujemny promień to błąd."""
    with pytest.raises(ValueError):
        HexMap(CELL, Style.FLAT, Vec2(0, 0), -1)


def test_all_cells_within_radius(small_map):
    """Każda komórka tablicy leży w promieniu regionu."""
    for hex in small_map.nodes:
        assert Axial(0, 0).distance(hex) <= 2
        assert small_map.on_grid(hex)


def test_on_grid(small_map):
    """on_grid oparte na odległości od (0, 0)."""
    assert small_map.on_grid(Axial(2, 0))
    assert small_map.on_grid(Axial(-2, 2))
    assert not small_map.on_grid(Axial(3, 0))
    assert not small_map.on_grid(Axial(2, 1))


def test_default_node_after_spawn(small_map):
    """Świeży węzeł: NONE, 0, domyślny uchwyt komórki."""
    node = small_map.get_node(Axial(1, 0))
    assert node.key == EventKey.NONE
    assert node.value == 0
    assert isinstance(node.entity, CellHandle)
    assert node.entity.hex == Axial(1, 0)
    assert node.entity.center == small_map.layout.center_for(Axial(1, 0))


def test_queries_outside_table(small_map):
    """Komórki spoza tablicy zwracają wartości domyślne, bez wyjątku."""
    outside = Axial(5, 5)
    assert small_map.get_node(outside) is None
    assert small_map.get_value(outside) == 0
    assert small_map.get_entity(outside) is None
    assert small_map.get_event_key(outside) == EventKey.NONE
    assert outside not in small_map


def test_get_hex(small_map):
    """get_hex używa Layout regionu."""
    center = small_map.layout.center_for(Axial(-1, 2))
    assert small_map.get_hex(center) == Axial(-1, 2)


def test_spawn_with_factory():
    """Fabryka tworzy obiekt sceny dla każdej komórki."""
    hex_map = HexMap(CELL, Style.FLAT, Vec2(10, 10), 1)
    created = hex_map.spawn_entities(lambda hex, center: ("sprite", hex, center))

    assert len(created) == 7
    entity = hex_map.get_entity(Axial(0, 1))
    assert entity[0] == "sprite"
    assert entity[1] == Axial(0, 1)
    assert entity[2] == hex_map.layout.center_for(Axial(0, 1))


def test_respawn_replaces_table(small_map):
    """Ponowne spawn_entities zastępuje tablicę."""
    small_map.set_node(Axial(0, 0), EventKey.ENERGY, 5)
    small_map.spawn_entities()
    assert small_map.get_event_key(Axial(0, 0)) == EventKey.NONE


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZMIANY PUNKTOWE
# ═══════════════════════════════════════════════════════════════════════════

def test_set_node(small_map):
    """set_node zmienia kategorię i wartość, entity zostaje."""
    entity = small_map.get_entity(Axial(1, -1))
    assert small_map.set_node(Axial(1, -1), EventKey.MINING, 42)
    assert small_map.get_event_key(Axial(1, -1)) == EventKey.MINING
    assert small_map.get_value(Axial(1, -1)) == 42
    assert small_map.get_entity(Axial(1, -1)) is entity


def test_set_node_outside_table(small_map):
    """set_node poza tablicą zwraca False i niczego nie dodaje."""
    assert not small_map.set_node(Axial(9, 0), EventKey.COMBAT, 1)
    assert Axial(9, 0) not in small_map


def test_clr_node_returns_entity(small_map):
    """clr_node zeruje węzeł i oddaje entity."""
    small_map.set_node(Axial(0, 1), EventKey.ENERGY, 7)
    entity = small_map.get_entity(Axial(0, 1))

    detached = small_map.clr_node(Axial(0, 1))

    assert detached is entity
    assert small_map.get_node(Axial(0, 1)) == HexNode()
    assert small_map.clr_node(Axial(8, 8)) is None


def test_debug_print(small_map):
    """debug_print: jeden wiersz na r, symbole kategorii."""
    small_map.set_node(Axial(0, 0), EventKey.ENERGY, 1)
    small_map.set_node(Axial(1, 0), EventKey.MINING, 1)
    lines = small_map.debug_print().splitlines()
    assert len(lines) == 5
    assert lines[2].split() == [".", ".", "E", "M", "."]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: COLLECT
# ═══════════════════════════════════════════════════════════════════════════

def test_collect_projects_by_pixels(parent):
    """Węzeł pod-regionu trafia w komórkę rodzica pod jego środkiem."""
    child = _child_at(parent, Axial(1, 0))
    child.set_node(Axial(0, 0), EventKey.ENERGY, 7)
    child.set_node(Axial(0, 1), EventKey.MINING, 3)

    merged = parent.collect(child)

    assert merged == 7
    assert parent.get_event_key(Axial(1, 0)) == EventKey.ENERGY
    assert parent.get_value(Axial(1, 0)) == 7
    assert parent.get_event_key(Axial(1, 1)) == EventKey.MINING


def test_collect_disjoint_union(parent):
    """Rozłączne pod-regiony: rodzic zawiera węzły obu."""
    left = _child_at(parent, Axial(-2, 0))
    right = _child_at(parent, Axial(2, 0))
    left.set_node(Axial(0, 0), EventKey.COMBAT, 1)
    right.set_node(Axial(0, 0), EventKey.ENERGY, 2)

    parent.collect(left)
    parent.collect(right)

    assert parent.get_event_key(Axial(-2, 0)) == EventKey.COMBAT
    assert parent.get_event_key(Axial(2, 0)) == EventKey.ENERGY


def test_collect_last_write_wins(parent):
    """Nakładające się pod-regiony: wygrywa ostatni zapis."""
    first = _child_at(parent, Axial(0, 0))
    second = _child_at(parent, Axial(1, 0))
    first.set_node(Axial(1, 0), EventKey.MINING, 10)
    second.set_node(Axial(0, 0), EventKey.ENERGY, 20)

    parent.collect(first)
    assert parent.get_value(Axial(1, 0)) == 10

    parent.collect(second)
    assert parent.get_event_key(Axial(1, 0)) == EventKey.ENERGY
    assert parent.get_value(Axial(1, 0)) == 20


def test_collect_copies_nodes(parent):
    """Późniejsza zmiana pod-regionu nie wpływa na rodzica."""
    child = _child_at(parent, Axial(0, 0))
    child.set_node(Axial(0, 0), EventKey.ENERGY, 5)
    parent.collect(child)

    child.set_node(Axial(0, 0), EventKey.MINING, 99)

    assert parent.get_event_key(Axial(0, 0)) == EventKey.ENERGY
    assert parent.get_value(Axial(0, 0)) == 5


def test_collect_skips_off_grid(parent):
    """Rzuty poza region rodzica są pomijane i logowane."""
    child = _child_at(parent, Axial(4, 0))
    logger = EventLogger(seed=0)
    before = len(parent)

    merged = parent.collect(child, logger)

    assert merged == 4
    assert len(parent) == before
    assert Axial(5, 0) not in parent
    assert len(logger.get_events_by_type(EventType.COLLECT_SKIPPED)) == 3
    collect = logger.get_events_by_type(EventType.REGION_COLLECT)
    assert collect[0].data == {"merged": 4, "total": 7}


def test_collect_smaller_cells_many_to_one(parent):
    """Mniejsze komórki pod-regionu: wiele trafia w jedną komórkę rodzica."""
    child = HexMap(Vec2(16.0, 16.0), Style.POINTY, Vec2(0, 0), 3)
    child.spawn_entities()
    for value, hex in enumerate(child.nodes, start=1):
        child.set_node(hex, EventKey.MINING, value)

    expected = {}
    for hex, node in child.nodes.items():
        expected[parent.layout.hex_for(child.layout.center_for(hex))] = node.value

    before = set(parent.nodes)
    merged = parent.collect(child)

    assert merged == len(child)
    assert len(expected) < len(child)
    assert set(parent.nodes) == before
    for hex in parent.nodes:
        if hex in expected:
            assert parent.get_event_key(hex) == EventKey.MINING
            assert parent.get_value(hex) == expected[hex]
        else:
            assert parent.get_event_key(hex) == EventKey.NONE
