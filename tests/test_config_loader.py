"""
Testy dla ConfigLoader.

Testuje:
- Parametry mapy i scatter z defaults.yaml
- Merge profili z wartościami bazowymi
- Brakujące profile
- Cache i reload
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexscatter.core.config_loader import ConfigLoader
from hexscatter.scatter.generator import ScatterConfig


DATA_PATH = Path(__file__).parent.parent / "data"


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def loader():
    """Loader z data/ projektu."""
    return ConfigLoader(str(DATA_PATH))


@pytest.fixture
def tmp_loader(tmp_path):
    """Loader z własnym, minimalnym defaults.yaml."""
    (tmp_path / "defaults.yaml").write_text(
        "scatter:\n"
        "  min_radius: 10\n"
        "  average_radius: 20\n"
        "  max_radius: 30\n"
        "  nested: {a: 1, b: 2}\n"
        "scatter_profiles:\n"
        "  custom:\n"
        "    max_radius: 40\n"
        "    nested: {b: 5}\n"
        "  empty:\n",
        encoding="utf-8",
    )
    return ConfigLoader(str(tmp_path))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DEFAULTS
# ═══════════════════════════════════════════════════════════════════════════

def test_map_config(loader):
    """Domyślne parametry mapy."""
    config = loader.get_map_config()
    assert config["radius"] == 12
    assert config["style"] == "pointy"
    assert config["cell_size"] == [64.0, 64.0]


def test_scatter_config(loader):
    """Bazowe parametry scatter pokrywają się z ScatterConfig()."""
    config = ScatterConfig.from_dict(loader.get_scatter_config())
    assert config == ScatterConfig()


def test_returned_config_is_copy(loader):
    """Zmiana zwróconego słownika nie psuje cache."""
    loader.get_map_config()["radius"] = 99
    assert loader.get_map_config()["radius"] == 12


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PROFILE
# ═══════════════════════════════════════════════════════════════════════════

def test_profile_ids(loader):
    """Profile zdefiniowane w defaults.yaml."""
    assert set(loader.get_profile_ids()) == {"standard", "dense", "sparse"}


def test_profile_merge_with_base(loader):
    """Profil nadpisuje bazę, brakujące klucze są uzupełniane."""
    dense = loader.load_scatter_profile("dense")
    assert dense["id"] == "dense"
    assert dense["min_radius"] == 64
    assert dense["iterations"] == 96


def test_every_profile_is_valid(loader):
    """Każdy profil tworzy poprawną ScatterConfig."""
    for profile_id in loader.get_profile_ids():
        ScatterConfig.from_dict(loader.load_scatter_profile(profile_id))


def test_missing_profile(loader):
    """Nieznany profil rzuca KeyError."""
    with pytest.raises(KeyError):
        loader.load_scatter_profile("does_not_exist")


def test_deep_merge(tmp_loader):
    """Zagnieżdżone słowniki są łączone rekurencyjnie."""
    custom = tmp_loader.load_scatter_profile("custom")
    assert custom["max_radius"] == 40
    assert custom["min_radius"] == 10
    assert custom["nested"] == {"a": 1, "b": 5}


def test_empty_profile(tmp_loader):
    """Pusty profil to same wartości bazowe."""
    empty = tmp_loader.load_scatter_profile("empty")
    assert empty["max_radius"] == 30


def test_missing_file(tmp_path):
    """Brak defaults.yaml -> FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        ConfigLoader(str(tmp_path / "nowhere")).get_defaults()


def test_reload(tmp_loader, tmp_path):
    """reload wczytuje zmieniony plik."""
    assert tmp_loader.get_scatter_config()["min_radius"] == 10
    (tmp_path / "defaults.yaml").write_text("scatter:\n  min_radius: 11\n", encoding="utf-8")

    assert tmp_loader.get_scatter_config()["min_radius"] == 10
    tmp_loader.reload()
    assert tmp_loader.get_scatter_config()["min_radius"] == 11
