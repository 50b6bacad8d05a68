"""
Battle engine: the turn loop that decides who wins a fight.

Given two immutable character definitions and a random source, the engine
builds a fresh combat state per side, runs the turn loop (random event, rage
check, special move or normal attack, knockout check, role swap) and returns
the outcome with its complete ordered log.

The engine keeps no per-fight state on itself, so one instance may run any
number of independent fights. When built with an EventManager it also
publishes what happened; it never performs I/O.
"""
from dataclasses import dataclass
from typing import Optional

from ...core.data import (
    CharacterDefinition,
    CombatState,
    EventScope,
    FightEnding,
    FightLogEntry,
    FightOutcome,
    LogEntryKind,
)
from ...core.events import (
    AttackResolved,
    BattleEvent,
    DebugMessage,
    EventManager,
    FightEnded,
    FighterDefeated,
    FightStarted,
    LogMessage,
    RageActivated,
    RandomEventTriggered,
    SpecialMoveUsed,
    TurnStarted,
)
from ...core.random_source import RandomSource
from .battle_rules import DEFAULT_RULES, BattleRules
from .combat_resolver import CombatResolver
from .random_events import RANDOM_EVENTS
from .special_moves import get_special_move


@dataclass
class _Fight:
    """Working set of a single simulation. Never escapes ``simulate``."""
    first: CombatState
    second: CombatState
    rng: RandomSource
    resolver: CombatResolver
    log: list[FightLogEntry]


class BattleEngine:
    """Runs fights between two character definitions."""

    SOURCE = "BattleEngine"

    def __init__(self, rules: Optional[BattleRules] = None, event_manager: Optional[EventManager] = None):
        self.rules = rules or DEFAULT_RULES
        self.event_manager = event_manager

    # --- Public API ---------------------------------------------------

    def simulate(
        self,
        first: CharacterDefinition,
        second: CharacterDefinition,
        rng: Optional[RandomSource] = None
    ) -> FightOutcome:
        """
        Simulate one fight.

        Args:
            first: Combatant ``a``; wins speed ties and full tiebreaks
            second: Combatant ``b``
            rng: Random source for every draw; an unseeded one when omitted

        Returns:
            FightOutcome whose winner/loser are the definitions passed in
        """
        rng = rng or RandomSource()
        fight = _Fight(
            first=CombatState.from_definition(first),
            second=CombatState.from_definition(second),
            rng=rng,
            resolver=CombatResolver(self.rules, rng),
            log=[],
        )

        attacker, defender = self._setup(fight)
        self._publish(FightStarted(turn=0, first=first, second=second))

        turn = 1
        ending: Optional[FightEnding] = None

        while fight.first.is_alive and fight.second.is_alive:
            self._record(fight, FightLogEntry(turn, f"--- Turn {turn} ---", LogEntryKind.TURN))
            self._publish(TurnStarted(turn=turn, attacker_name=attacker.name, defender_name=defender.name))

            self._roll_random_event(fight, turn)

            # Attacker first, then defender, each at most once per fight
            self._check_rage(fight, attacker, turn)
            self._check_rage(fight, defender, turn)

            # The special gate is the fight-global turn number, so only the
            # combatant attacking on that turn ever gets the opportunity.
            if turn == self.rules.special_move_turn and not attacker.used_special:
                if not self._use_special_move(fight, attacker, defender, turn):
                    self._normal_attack(fight, attacker, defender, turn)
            else:
                self._normal_attack(fight, attacker, defender, turn)

            if not defender.is_alive:
                self._record(
                    fight,
                    FightLogEntry(turn, f"[K.O.] {defender.name} has been defeated!", LogEntryKind.KNOCKOUT),
                )
                self._publish(FighterDefeated(turn=turn, fighter_name=defender.name, defeated_by=attacker.name))
                ending = FightEnding.KNOCKOUT
                break

            attacker, defender = defender, attacker
            turn += 1

            if turn > self.rules.max_turns:
                self._record(
                    fight,
                    FightLogEntry(
                        turn,
                        f"[TIMEOUT] Fight exceeded {self.rules.max_turns} turns! Ending in a draw...",
                        LogEntryKind.TIMEOUT,
                    ),
                )
                ending = FightEnding.TIMEOUT
                break

        if ending is None:
            # Loop condition failed: the previous attacker fell to a random event
            ending = FightEnding.EVENT_KNOCKOUT

        outcome = self._resolve_outcome(fight, turn, ending)
        self._publish(FightEnded(turn=turn, outcome=outcome))
        return outcome

    # --- Setup --------------------------------------------------------

    def _setup(self, fight: _Fight) -> tuple[CombatState, CombatState]:
        """Write the turn 0 log and return (attacker, defender) for turn 1."""
        first, second = fight.first, fight.second

        self._record(fight, FightLogEntry(0, f"[BATTLE INITIATED] {first.name} vs {second.name}", LogEntryKind.SETUP))
        for fighter in (first, second):
            self._record(
                fight,
                FightLogEntry(
                    0,
                    f"{fighter.name}: HP={fighter.max_hp}, ATK={fighter.current_attack}, SPD={fighter.current_speed}",
                    LogEntryKind.SETUP,
                ),
            )

        # Speed ties go to the first combatant
        if first.current_speed >= second.current_speed:
            attacker, defender = first, second
        else:
            attacker, defender = second, first

        self._record(
            fight,
            FightLogEntry(0, f"{attacker.name} has higher speed and will attack first!", LogEntryKind.SETUP),
        )
        return attacker, defender

    # --- Turn steps ---------------------------------------------------

    def _roll_random_event(self, fight: _Fight, turn: int) -> None:
        if not fight.rng.chance(self.rules.random_event_chance):
            return

        event = fight.rng.pick(RANDOM_EVENTS)
        self._record(
            fight,
            FightLogEntry(turn, f"[RANDOM EVENT: {event.name}] {event.effect}", LogEntryKind.RANDOM_EVENT),
        )

        if event.scope == EventScope.BOTH:
            event.apply(fight.first)
            event.apply(fight.second)
            self._publish(RandomEventTriggered(turn=turn, event_name=event.name))
            return

        target = fight.first if fight.rng.coin_flip() else fight.second
        event.apply(target)
        if event.announcement:
            self._record(
                fight,
                FightLogEntry(turn, event.announcement.format(name=target.name), LogEntryKind.RANDOM_EVENT),
            )
        self._publish(RandomEventTriggered(turn=turn, event_name=event.name, affected_name=target.name))

    def _check_rage(self, fight: _Fight, fighter: CombatState, turn: int) -> None:
        if fighter.rage_mode or not self.rules.rage_threshold_reached(fighter.current_hp, fighter.max_hp):
            return

        fighter.rage_mode = True
        fighter.current_attack += self.rules.rage_attack_bonus
        self._record(
            fight,
            FightLogEntry(
                turn,
                f"[RAGE MODE] {fighter.name} enters RAGE MODE! Attack +{self.rules.rage_attack_bonus}!",
                LogEntryKind.RAGE,
            ),
        )
        self._publish(RageActivated(turn=turn, fighter_name=fighter.name, new_attack=fighter.current_attack))

    def _use_special_move(self, fight: _Fight, attacker: CombatState, defender: CombatState, turn: int) -> bool:
        """Fire the attacker's special move.

        Returns:
            False when the move id is not in the catalog; the caller then
            falls back to a normal attack and the special stays unused.
        """
        move = get_special_move(attacker.special_move_id)
        if move is None:
            self._record(
                fight,
                FightLogEntry(
                    turn,
                    f"[SPECIAL MOVE] {attacker.name} has no special move #{attacker.special_move_id}. "
                    "No special move triggered!",
                    LogEntryKind.SPECIAL,
                    attacker_name=attacker.name,
                ),
            )
            return False

        self._record(
            fight,
            FightLogEntry(
                turn,
                f"[SPECIAL MOVE] {attacker.name} uses {move.name}! ({move.description})",
                LogEntryKind.SPECIAL,
                attacker_name=attacker.name,
            ),
        )

        move.effect(attacker, defender)
        attacker.used_special = True

        self._record(fight, FightLogEntry(turn, attacker.stat_line(), LogEntryKind.SPECIAL))
        self._record(fight, FightLogEntry(turn, defender.stat_line(), LogEntryKind.SPECIAL))
        self._publish(
            SpecialMoveUsed(
                turn=turn,
                attacker_name=attacker.name,
                defender_name=defender.name,
                move_id=move.id,
                move_name=move.name,
            )
        )
        return True

    def _normal_attack(self, fight: _Fight, attacker: CombatState, defender: CombatState, turn: int) -> None:
        result, entries = fight.resolver.resolve_attack(attacker, defender, turn)
        for entry in entries:
            self._record(fight, entry)

        self._debug(
            turn,
            f"{attacker.name} -> {defender.name}: dodge chance {result.dodge_chance:.2f}, "
            f"dodged={result.dodged}, crit={result.critical}",
        )
        self._publish(
            AttackResolved(
                turn=turn,
                attacker_name=attacker.name,
                defender_name=defender.name,
                damage=result.damage.dealt if result.damage else 0,
                absorbed=result.damage.absorbed if result.damage else 0,
                critical=result.critical,
                dodged=result.dodged,
            )
        )

    # --- Resolution ---------------------------------------------------

    def _resolve_outcome(self, fight: _Fight, turn: int, ending: FightEnding) -> FightOutcome:
        first, second = fight.first, fight.second

        if first.current_hp != second.current_hp:
            winner, loser = (first, second) if first.current_hp > second.current_hp else (second, first)
            message = f"[VICTORY] {winner.name} WINS!"
        else:
            # Exact tie: higher original max HP, then the first combatant
            winner, loser = (first, second) if first.max_hp >= second.max_hp else (second, first)
            message = f"[DRAW] Tie! {winner.name} wins by tiebreaker."

        self._record(fight, FightLogEntry(turn, message, LogEntryKind.RESULT))

        return FightOutcome(
            winner=winner.definition,
            loser=loser.definition,
            log=tuple(fight.log),
            turns=turn,
            ending=ending,
            final_hp={first.name: first.current_hp, second.name: second.current_hp},
        )

    # --- Event plumbing -----------------------------------------------

    def _record(self, fight: _Fight, entry: FightLogEntry) -> None:
        fight.log.append(entry)
        if self.event_manager is not None:
            self.event_manager.publish(
                LogMessage(turn=entry.turn, message=entry.message, category="BATTLE", source=self.SOURCE),
                source=self.SOURCE,
            )

    def _publish(self, event: BattleEvent) -> None:
        if self.event_manager is not None:
            self.event_manager.publish(event, source=self.SOURCE)

    def _debug(self, turn: int, message: str) -> None:
        if self.event_manager is not None:
            self.event_manager.publish(DebugMessage(turn=turn, message=message, source=self.SOURCE), source=self.SOURCE)


def simulate(
    first: CharacterDefinition,
    second: CharacterDefinition,
    rng: Optional[RandomSource] = None,
    rules: Optional[BattleRules] = None
) -> FightOutcome:
    """Run a single fight without an event bus."""
    return BattleEngine(rules=rules).simulate(first, second, rng)
