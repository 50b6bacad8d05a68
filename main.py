#!/usr/bin/env python3
"""Command line entry point for the boss battle workshop."""

import argparse
import sys

from bossbattle.core.events import EventManager
from bossbattle.core.random_source import RandomSource
from bossbattle.game.battle import BattleEngine, load_battle_rules
from bossbattle.game.managers import LogCategory, LogManager, ScoreboardManager
from bossbattle.game.roster import RosterError, load_definitions, load_roster, validate_boss
from bossbattle.game.tournament import Tournament


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Boss battle workshop: simulate fights between student-designed bosses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py fight Gravemaw "Ashen Regent" --seed 7
  python main.py tournament --seed 42 --save-log
  python main.py validate --roster my_roster.yaml
        """
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--roster", help="Roster YAML file (default: bundled workshop roster)")
    common.add_argument("--rules", help="Battle rules YAML file (default: built-in rules)")
    common.add_argument("--seed", type=int, help="Seed for a reproducible run")
    common.add_argument("--save-log", action="store_true", help="Write the full log to logs/")
    common.add_argument("--debug", action="store_true", help="Show roll details after each fight")

    commands = parser.add_subparsers(dest="command", required=True)

    fight = commands.add_parser("fight", parents=[common], help="Simulate a single fight")
    fight.add_argument("first", help="Name of the first boss (wins speed ties)")
    fight.add_argument("second", help="Name of the second boss")

    commands.add_parser("tournament", parents=[common], help="Run a bracket over the session bosses")
    commands.add_parser("validate", parents=[common], help="Check every boss in a roster file")
    return parser


def print_standings(scoreboard: ScoreboardManager) -> None:
    print("\n=== Standings ===")
    for rank, entry in enumerate(scoreboard.standings(), start=1):
        print(f"{rank:>2}. {entry.name:<20} {entry.games_won}W / {entry.games_played}P")


def run_fight(args, engine: BattleEngine, roster, event_manager: EventManager) -> None:
    first = roster.get(args.first)
    second = roster.get(args.second)

    outcome = engine.simulate(first, second, RandomSource(args.seed))
    event_manager.process_events()

    for message in outcome.messages():
        print(message)


def run_tournament(args, engine: BattleEngine, roster, event_manager: EventManager) -> None:
    tournament = Tournament(roster.session_bosses(), engine=engine, rng=RandomSource(args.seed))

    while not tournament.is_complete:
        round_number = tournament.current_round
        outcomes = tournament.play_round()
        event_manager.process_events()

        print(f"\n=== Round {round_number} ===")
        for match in tournament.round_matches(round_number):
            if match.outcome is not None:
                print(f"{match.id}: {match.outcome.winner.name} defeats {match.outcome.loser.name} "
                      f"({match.outcome.turns} turns, {match.outcome.ending.name.lower()})")
            elif match.winner is not None:
                print(f"{match.id}: {match.winner.name} advances with a bye")
        if not outcomes:
            print("(no fights)")

    assert tournament.champion is not None
    print(f"\nCHAMPION: {tournament.champion.name}")


def run_validate(args, rules) -> bool:
    definitions = load_definitions(args.roster)
    all_valid = True
    for definition in definitions:
        errors = validate_boss(definition, rules)
        if errors:
            all_valid = False
            print(f"[INVALID] {definition.name or '<unnamed>'}")
            for error in errors:
                print(f"  - {error}")
        else:
            print(f"[OK] {definition.name} ({definition.stat_total}/{rules.max_stat_points} points)")
    return all_valid


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    event_manager = EventManager()
    log_manager = LogManager(event_manager)
    if args.debug:
        log_manager.toggle_debug()

    try:
        rules = load_battle_rules(args.rules)

        if args.command == "validate":
            return 0 if run_validate(args, rules) else 1

        roster = load_roster(args.roster, rules=rules, event_manager=event_manager)
        scoreboard = ScoreboardManager(event_manager, roster=roster)
        engine = BattleEngine(rules=rules, event_manager=event_manager)

        if args.command == "fight":
            run_fight(args, engine, roster, event_manager)
        else:
            run_tournament(args, engine, roster, event_manager)

        event_manager.process_events()
        print_standings(scoreboard)

        if args.debug:
            print("\n=== Debug ===")
            for record in log_manager.get_messages(categories={LogCategory.DEBUG}):
                print(record.format())
    except RosterError as e:
        print(f"Roster error: {e}", file=sys.stderr)
        for error in e.errors:
            print(f"  - {error}", file=sys.stderr)
        return 1
    except (FileNotFoundError, KeyError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if args.save_log:
            event_manager.process_events()
            path = log_manager.save_log_to_file()
            if path:
                print(f"\nLog saved to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
