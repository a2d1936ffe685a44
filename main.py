#!/usr/bin/env python3
"""
Grid Tactics Battle Simulator - Entry Point
═══════════════════════════════════════════════════════════════════════════

Generuje dwie armie z katalogu (data/units.yaml) i rozgrywa bitwę.

Użycie:
    python main.py                    # Domyślny seed
    python main.py --seed 12345       # Konkretny seed
    python main.py --points 800       # Budżet obu armii
    python main.py --verbose          # Każdy atak na konsoli

Wynik:
    - Wypisuje skład armii i wynik bitwy na konsolę
    - Zapisuje pełny log do output/battle_{seed}.json
"""

import argparse
import sys

from tactics.core.config_loader import ConfigLoader, get_value
from tactics.core.grid import GridConfig
from tactics.core.rng import GameRNG
from tactics.army.generator import ArmyGenerator, GeneratorConfig
from tactics.units.program import assign_programs
from tactics.events.event_logger import EventLogger, EventType, PrintBattleLog, BattleLog
from tactics.simulation.battle import BattleSimulator, BattleConfig


class _TeeBattleLog(BattleLog):
    """Przekazuje raport o ataku do kilku logów."""

    def __init__(self, *logs: BattleLog):
        self.logs = logs

    def record(self, attacker, target) -> None:
        for log in self.logs:
            log.record(attacker, target)


def _print_army(title: str, army) -> None:
    print(f"{title} ({army.points} pkt, {len(army)} jednostek):")
    for unit_type, count in army.count_by_type().items():
        print(f"  - {unit_type} x{count}")


def main(argv=None):
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="Grid Tactics Battle Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=12345,
        help="Ziarno losowości (domyślnie: 12345)"
    )
    parser.add_argument(
        "--points",
        type=int,
        default=None,
        help="Budżet punktów każdej armii (domyślnie: z defaults.yaml)"
    )
    parser.add_argument(
        "--data",
        default="data/",
        help="Folder z plikami YAML"
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

    args = parser.parse_args(argv)

    print("=" * 60)
    print("GRID TACTICS BATTLE SIMULATOR")
    print("=" * 60)
    print(f"Seed: {args.seed}")
    print()

    # Załaduj konfigurację
    loader = ConfigLoader(args.data)
    catalog = loader.load_catalog()
    grid_config = GridConfig.from_dict(loader.get_grid_config())
    generator_config = GeneratorConfig.from_dict(loader.get_army_config(), loader.get_grid_config())
    battle_config = BattleConfig.from_dict(loader.get_battle_config())
    points = args.points if args.points is not None else get_value(loader.get_army_config(), "default_points", 1500)

    rng = GameRNG(args.seed)

    # ─────────────────────────────────────────────────────────────────────────
    # ARMIE
    # ─────────────────────────────────────────────────────────────────────────
    logger = EventLogger(seed=args.seed, grid_width=grid_config.width, grid_height=grid_config.height)

    # Osobne generatory - ranking jest cache'owany per instancja
    try:
        player_army = ArmyGenerator(generator_config, rng.fork()).generate(catalog, points)
        computer_army = ArmyGenerator(generator_config, rng.fork()).generate(catalog, points)
    except ValueError as e:
        print(f"❌ Nie można rozstawić armii za {points} pkt: {e}")
        return 1
    computer_army.mirror(grid_config.width)

    logger.log_army_generated(player_army.points, player_army.count_by_type())
    logger.log_army_generated(computer_army.points, computer_army.count_by_type())

    _print_army("Gracz (lewa strona)", player_army)
    _print_army("Komputer (prawa strona)", computer_army)

    battlefield = player_army.units + computer_army.units
    battle_rng = rng.fork()
    assign_programs(player_army, computer_army, battlefield, is_left_side=True, rng=battle_rng)
    assign_programs(computer_army, player_army, battlefield, is_left_side=False, rng=battle_rng)

    print()
    print("-" * 60)
    print("ROZPOCZYNAM WALKĘ...")
    print("-" * 60)
    print()

    battle_log = _TeeBattleLog(logger, PrintBattleLog()) if args.verbose else logger
    simulator = BattleSimulator(battle_log, battle_config, events=logger)

    result = simulator.simulate(player_army, computer_army)

    # Wyniki
    print()
    print("=" * 60)
    print("WYNIKI")
    print("=" * 60)

    if result.winner is not None:
        print(f"🏆 ZWYCIĘZCA: {result.winner}")
    else:
        print("🤝 BRAK ROZSTRZYGNIĘCIA")

    print(f"Rundy: {result.rounds}")
    print()

    print("Ocaleni:")
    for survivor in result.survivors:
        print(f"  - {survivor.name} @ ({survivor.x}, {survivor.y}): {survivor.health} HP")

    if not args.no_save:
        output_path = f"output/battle_{args.seed}.json"
        logger.save(output_path)
        print()
        print(f"📄 Log zapisany: {output_path}")

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
    print("Symulacja zakończona!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
