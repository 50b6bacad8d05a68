"""
Injectable random source for battle simulation.

Every random draw in a fight goes through a single ``RandomSource`` handed to
the engine, so a seeded source reproduces the same log and outcome. All helper
draws are built on ``random()`` which keeps the draw order explicit and lets
tests script exact values by overriding that one method.

Draw sites in a turn, in order:
  1. random event check        chance(random_event_chance)
  2. random event selection    pick(catalog)
  3. side selection            coin_flip()          (one-sided events only)
  4. dodge roll                chance(dodge_chance) (normal attacks only)
  5. crit roll                 chance(crit_chance)  (when not dodged)
"""
import random
from typing import MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """Random number wrapper so you can:
    - seed for reproducible fights and tests
    - swap the generator (or script it) without touching the engine
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.seed = seed
        self._rng = rng if rng is not None else random.Random(seed)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self.random() < probability

    def coin_flip(self) -> bool:
        """Fair coin. True selects the first combatant."""
        return self.chance(0.5)

    def pick(self, options: Sequence[T]) -> T:
        """Pick one option uniformly.

        Raises:
            ValueError: If options is empty
        """
        if not options:
            raise ValueError("Cannot pick from an empty sequence")
        index = int(self.random() * len(options))
        # Guard against a scripted source returning exactly 1.0
        return options[min(index, len(options) - 1)]

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle in place (Fisher-Yates over ``random()``)."""
        for i in range(len(items) - 1, 0, -1):
            j = min(int(self.random() * (i + 1)), i)
            items[i], items[j] = items[j], items[i]

