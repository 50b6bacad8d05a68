"""Single-elimination tournament bracket.

Entrants are shuffled with the injected random source and seeded into a
bracket padded to the next power of two. Matches are identified as
``r{round}-m{position}``; the winner of a match moves to position
``position // 2`` of the next round, taking slot one from even positions and
slot two from odd ones.

A match that ends up with a single entrant once its round is reached is a
bye: the entrant advances without a fight.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ...core.data import CharacterDefinition, FightOutcome, MatchStatus
from ...core.events import LogMessage, RoundCompleted, TournamentCompleted
from ...core.random_source import RandomSource
from ..battle.battle_engine import BattleEngine


@dataclass
class Match:
    """One bracket slot pairing."""
    id: str
    round: int
    position: int
    first: Optional[CharacterDefinition] = None
    second: Optional[CharacterDefinition] = None
    winner: Optional[CharacterDefinition] = None
    outcome: Optional[FightOutcome] = None

    @property
    def entrants(self) -> list[CharacterDefinition]:
        return [boss for boss in (self.first, self.second) if boss is not None]

    @property
    def status(self) -> MatchStatus:
        """Structural status; BYE is only final once the previous round is done."""
        if self.winner is not None:
            return MatchStatus.COMPLETED
        count = len(self.entrants)
        if count == 2:
            return MatchStatus.READY
        if count == 1:
            return MatchStatus.BYE
        return MatchStatus.PENDING


class Tournament:
    """Runs a bracket of fights to a single champion."""

    SOURCE = "Tournament"

    def __init__(
        self,
        bosses: Sequence[CharacterDefinition],
        engine: Optional[BattleEngine] = None,
        rng: Optional[RandomSource] = None
    ):
        """Seed the bracket.

        Args:
            bosses: Entrants, at least two
            engine: Engine used for every fight; its event manager, if any,
                also receives the tournament's events
            rng: Random source for seeding and for every fight

        Raises:
            ValueError: If fewer than two bosses are entered
        """
        if len(bosses) < 2:
            raise ValueError(f"A tournament needs at least 2 bosses, got {len(bosses)}")

        self.engine = engine or BattleEngine()
        self.rng = rng or RandomSource()

        entrants = list(bosses)
        self.rng.shuffle(entrants)
        self.entrants: tuple[CharacterDefinition, ...] = tuple(entrants)

        self.bracket_size = 1 << (len(entrants) - 1).bit_length()
        self.total_rounds = self.bracket_size.bit_length() - 1
        self.current_round = 1
        self.champion: Optional[CharacterDefinition] = None

        self.matches: dict[str, Match] = {}
        for position in range(self.bracket_size // 2):
            pair = entrants[position * 2:position * 2 + 2]
            self._add_match(
                Match(
                    id=f"r1-m{position}",
                    round=1,
                    position=position,
                    first=pair[0] if len(pair) > 0 else None,
                    second=pair[1] if len(pair) > 1 else None,
                )
            )
        for round_number in range(2, self.total_rounds + 1):
            for position in range(2 ** (self.total_rounds - round_number)):
                self._add_match(Match(id=f"r{round_number}-m{position}", round=round_number, position=position))

        self._settle()

    def _add_match(self, match: Match) -> None:
        self.matches[match.id] = match

    def _emit_log(self, message: str) -> None:
        event_manager = self.engine.event_manager
        if event_manager is not None:
            event_manager.publish(
                LogMessage(turn=0, message=message, category="TOURNAMENT", source=self.SOURCE),
                source=self.SOURCE
            )

    def _publish(self, event) -> None:
        if self.engine.event_manager is not None:
            self.engine.event_manager.publish(event, source=self.SOURCE)

    @property
    def is_complete(self) -> bool:
        return self.champion is not None

    def round_matches(self, round_number: int) -> list[Match]:
        """Matches of a round ordered by position."""
        return [m for m in self.matches.values() if m.round == round_number]

    def play_match(self, match_id: str) -> FightOutcome:
        """Fight one ready match and advance its winner.

        Raises:
            KeyError: If the match id is unknown
            RuntimeError: If the tournament is already decided
            ValueError: If the match does not have two entrants or is done
        """
        if self.is_complete:
            raise RuntimeError("Tournament is already complete")
        match = self.matches[match_id]
        if match.status != MatchStatus.READY:
            raise ValueError(f"Match {match_id} is not ready to be played ({match.status.name})")

        assert match.first is not None and match.second is not None
        outcome = self.engine.simulate(match.first, match.second, self.rng)
        match.outcome = outcome
        self._finish(match, outcome.winner)
        self._emit_log(f"{match.id}: {outcome.winner.name} defeats {outcome.loser.name} in {outcome.turns} turns")

        self._settle()
        return outcome

    def play_round(self) -> list[FightOutcome]:
        """Fight every ready match of the current round.

        Raises:
            RuntimeError: If the tournament is already decided
        """
        if self.is_complete:
            raise RuntimeError("Tournament is already complete")
        ready = [m for m in self.round_matches(self.current_round) if m.status == MatchStatus.READY]
        return [self.play_match(match.id) for match in ready]

    def play_all(self) -> CharacterDefinition:
        """Play rounds until a champion is crowned and return it."""
        while not self.is_complete:
            self.play_round()
        assert self.champion is not None
        return self.champion

    def _finish(self, match: Match, winner: CharacterDefinition) -> None:
        match.winner = winner
        if match.round == self.total_rounds:
            return
        next_match = self.matches[f"r{match.round + 1}-m{match.position // 2}"]
        if match.position % 2 == 0:
            next_match.first = winner
        else:
            next_match.second = winner

    def _settle(self) -> None:
        """Resolve byes and close out every round that has nothing left to fight."""
        while not self.is_complete:
            matches = self.round_matches(self.current_round)

            for match in matches:
                if match.status == MatchStatus.BYE:
                    bye_winner = match.entrants[0]
                    self._finish(match, bye_winner)
                    self._emit_log(f"{match.id}: {bye_winner.name} advances with a bye")

            if any(match.status == MatchStatus.READY for match in matches):
                return

            advancing = tuple(m.winner.name for m in matches if m.winner is not None)
            self._publish(RoundCompleted(turn=0, round_number=self.current_round, advancing=advancing))
            self._emit_log(f"Round {self.current_round} complete: {', '.join(advancing)} advance")

            if self.current_round == self.total_rounds:
                self.champion = matches[0].winner
                assert self.champion is not None
                self._publish(TournamentCompleted(turn=0, champion=self.champion, rounds=self.total_rounds))
                self._emit_log(f"{self.champion.name} is the tournament champion!")
                return

            self.current_round += 1
