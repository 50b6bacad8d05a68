"""Scoreboard manager for lifetime and session standings.

Listens for FIGHT_ENDED and tallies games played and won per boss, plus
session wins and losses for bosses in the active workshop session. Rankings
are computed over numpy arrays so a full room of bosses sorts in one pass.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

from ...core.data import FightOutcome
from ...core.events import EventType, FightEnded, LogMessage

if TYPE_CHECKING:
    from ...core.events import EventManager
    from ..roster.boss_roster import BossRoster


@dataclass
class ScoreboardEntry:
    """Running record for one boss."""
    name: str
    games_played: int = 0
    games_won: int = 0
    session_wins: int = 0
    session_losses: int = 0

    @property
    def win_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played

    @property
    def session_games(self) -> int:
        return self.session_wins + self.session_losses


class ScoreboardManager:
    """Tallies fight outcomes into standings.

    When a roster is given, session counters only move for bosses currently
    in the roster's session. Without one, every fight counts toward the
    session.
    """

    def __init__(self, event_manager: "EventManager", roster: Optional["BossRoster"] = None):
        """Initialize the scoreboard.

        Args:
            event_manager: Event manager to receive FIGHT_ENDED from
            roster: Optional roster whose session membership gates session stats
        """
        self.event_manager = event_manager
        self.roster = roster
        self.entries: dict[str, ScoreboardEntry] = {}

        self.event_manager.subscribe(
            EventType.FIGHT_ENDED,
            self._on_fight_ended,
            subscriber_name="ScoreboardManager.fight_ended"
        )

    def _emit_log(self, message: str, turn: int = 0) -> None:
        self.event_manager.publish(
            LogMessage(turn=turn, message=message, category="SCOREBOARD", source="ScoreboardManager"),
            source="ScoreboardManager"
        )

    def _on_fight_ended(self, event) -> None:
        if isinstance(event, FightEnded):
            self.record_outcome(event.outcome)

    def _entry(self, name: str) -> ScoreboardEntry:
        if name not in self.entries:
            self.entries[name] = ScoreboardEntry(name=name)
        return self.entries[name]

    def _counts_for_session(self, name: str) -> bool:
        return self.roster is None or self.roster.in_session(name)

    def record_outcome(self, outcome: FightOutcome) -> None:
        """Credit the winner and loser of one fight."""
        winner = self._entry(outcome.winner.name)
        loser = self._entry(outcome.loser.name)

        winner.games_played += 1
        winner.games_won += 1
        loser.games_played += 1

        if self._counts_for_session(winner.name):
            winner.session_wins += 1
        if self._counts_for_session(loser.name):
            loser.session_losses += 1

        self._emit_log(
            f"{winner.name} {winner.games_won}W/{winner.games_played}P, "
            f"{loser.name} {loser.games_won}W/{loser.games_played}P",
            turn=outcome.turns,
        )

    def standings(self) -> list[ScoreboardEntry]:
        """Lifetime ranking: most wins first, fewer games breaks ties, then name."""
        entries = sorted(self.entries.values(), key=lambda e: e.name)
        if not entries:
            return []

        won = np.array([e.games_won for e in entries], dtype=np.int32)
        played = np.array([e.games_played for e in entries], dtype=np.int32)

        # lexsort uses the last key as primary and is stable, so name order survives
        order = np.lexsort((played, -won))
        return [entries[i] for i in order]

    def session_standings(self) -> list[ScoreboardEntry]:
        """Session ranking over bosses with session games: wins desc, losses asc, then name."""
        entries = sorted((e for e in self.entries.values() if e.session_games > 0), key=lambda e: e.name)
        if not entries:
            return []

        wins = np.array([e.session_wins for e in entries], dtype=np.int32)
        losses = np.array([e.session_losses for e in entries], dtype=np.int32)
        order = np.lexsort((losses, -wins))
        return [entries[i] for i in order]

    def win_rate(self, name: str) -> float:
        """Lifetime win rate of a boss.

        Raises:
            KeyError: If the boss has never fought
        """
        if name not in self.entries:
            raise KeyError(f"No scoreboard entry for '{name}'")
        return self.entries[name].win_rate

    def reset_session(self) -> None:
        """Zero every session counter; lifetime stats are kept."""
        for entry in self.entries.values():
            entry.session_wins = 0
            entry.session_losses = 0
        self._emit_log("Session standings reset")
