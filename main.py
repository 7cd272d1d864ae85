#!/usr/bin/env python3
"""
Hex Scatter - Entry Point
═══════════════════════════════════════════════════════════════════════════

Generuje punkty zainteresowania dla jednego regionu mapy hex
i wypisuje wynik na konsolę.

Użycie:
    python main.py                       # Domyślny seed
    python main.py --seed 12345          # Konkretny seed
    python main.py --seed-text near      # Seed z tekstu (SHA-256)
    python main.py --profile dense       # Profil z defaults.yaml
    python main.py --radius 6 --style flat
    python main.py --verbose             # Statystyki zdarzeń

Wynik:
    - Wypisuje mapę regionu (. / E / M) i listę punktów
    - Zapisuje pełny log do output/scatter_{seed}.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from hexscatter.core.config_loader import ConfigLoader
from hexscatter.core.hex_map import EventKey, HexMap
from hexscatter.core.layout import Style, Vec2
from hexscatter.core.rng import Shift64, seed_from
from hexscatter.events.event_logger import EventLogger, EventType
from hexscatter.events.event_table import EventTable
from hexscatter.scatter.generator import ScatterConfig, ScatterGenerator


def main():
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="Hex Scatter - rozmieszczanie punktów na mapie hex",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=12345,
        help="Ziarno losowości (domyślnie: 12345)"
    )
    parser.add_argument(
        "--seed-text",
        type=str,
        default=None,
        help="Tekst zamieniany na seed (nadpisuje --seed)"
    )
    parser.add_argument(
        "--radius",
        type=int,
        default=None,
        help="Promień regionu w komórkach (domyślnie z defaults.yaml)"
    )
    parser.add_argument(
        "--style",
        choices=["flat", "pointy"],
        default=None,
        help="Orientacja komórek (domyślnie z defaults.yaml)"
    )
    parser.add_argument(
        "--profile",
        type=str,
        default="standard",
        help="Profil scatter z defaults.yaml (domyślnie: standard)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowy output"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Nie zapisuj logu do pliku"
    )

    args = parser.parse_args()

    seed = seed_from(args.seed_text) if args.seed_text is not None else args.seed

    # Załaduj konfigurację
    loader = ConfigLoader(str(Path(__file__).parent / "data"))
    map_config = loader.get_map_config()

    try:
        scatter_config = ScatterConfig.from_dict(loader.load_scatter_profile(args.profile))
    except KeyError as e:
        print(f"Błąd: {e}. Dostępne profile: {', '.join(loader.get_profile_ids())}")
        return 1

    radius = args.radius if args.radius is not None else int(map_config.get("radius", 12))
    style = Style.parse(args.style or map_config.get("style", "pointy"))
    cell_w, cell_h = map_config.get("cell_size", [64, 64])
    origin_x, origin_y = map_config.get("origin", [0, 0])

    print("=" * 60)
    print("HEX SCATTER")
    print("=" * 60)
    if args.seed_text is not None:
        print(f"Seed: {seed} (z tekstu '{args.seed_text}')")
    else:
        print(f"Seed: {seed}")
    print(f"Region: promień {radius}, styl {style.name}, komórka {cell_w}x{cell_h}")
    print(f"Profil: {args.profile} "
          f"(min {scatter_config.min_radius:g}, avg {scatter_config.average_radius:g}, "
          f"max {scatter_config.max_radius:g})")
    print()

    # ─────────────────────────────────────────────────────────────────────────
    # GENERACJA
    # ─────────────────────────────────────────────────────────────────────────
    hex_map = HexMap(Vec2(cell_w, cell_h), style, Vec2(origin_x, origin_y), radius)
    hex_map.spawn_entities()

    logger = EventLogger(seed=seed)
    generator = ScatterGenerator(scatter_config, logger=logger)
    placements = generator.spawn_points(Shift64(seed), hex_map)

    print(hex_map.debug_print())
    print()

    # Wyniki
    print("=" * 60)
    print("WYNIKI")
    print("=" * 60)
    energy = sum(1 for p in placements if p.key is EventKey.ENERGY)
    print(f"Punkty: {len(placements)} (ENERGY: {energy}, MINING: {len(placements) - energy})")
    print(f"Błędne zapisy: {logger.summary.get('invalid', 0)}")
    print()

    for p in placements:
        print(f"  - {p.key.name:<6} {p.value:>3} @ {p.hex}")

    # Zapisz log
    if not args.no_save:
        output_path = f"output/scatter_{seed}.json"
        logger.save(output_path)
        print()
        print(f"📄 Log zapisany: {output_path}")

    # Verbose: pokaż statystyki
    if args.verbose:
        print()
        print("-" * 60)
        print("STATYSTYKI ZDARZEŃ")
        print("-" * 60)

        for event_type in EventType:
            count = len(logger.get_events_by_type(event_type))
            if count > 0:
                print(f"  {event_type.name}: {count}")

        print()
        print("-" * 60)
        print("ZDARZENIA PUNKTÓW (seed wejścia = seed + indeks)")
        print("-" * 60)

        table = EventTable.from_config(loader.load_event_tables())
        for index, p in enumerate(placements):
            info = table.roll(p.key, seed + index)
            actions = table.get_actions(p.key)
            print(f"  {p.hex}: {info.title} [{actions.enter} / {actions.leave}]")

    return 0


if __name__ == "__main__":
    sys.exit(main())
