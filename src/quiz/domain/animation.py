import math
from collections.abc import Callable, Iterator

from src.config import GameConfig


def step_toward(
    current: int, target: int, divisor: int = GameConfig.SCORE_STEP_DIVISOR
) -> int:
    """
    One animation tick: move `current` toward `target` by
    ceil(gap / divisor). Lands exactly on the target, never past it.
    """
    if divisor < 1:
        raise ValueError("divisor must be >= 1")
    if current >= target:
        # Score dropped (reset) or already there: snap, never count down.
        return target
    return min(target, current + math.ceil((target - current) / divisor))


def frames(
    start: int, target: int, divisor: int = GameConfig.SCORE_STEP_DIVISOR
) -> Iterator[int]:
    """Yields every intermediate value from `start` up to and including `target`."""
    current = start
    while current != target:
        current = step_toward(current, target, divisor)
        yield current


class ScoreAnimator:
    """
    Holds the cosmetic displayed score.
    Each tick pulls a fresh score snapshot from `read_score`, so a tick
    never works from a value captured before a check completed.
    """

    def __init__(
        self,
        read_score: Callable[[], int],
        divisor: int = GameConfig.SCORE_STEP_DIVISOR,
    ) -> None:
        if divisor < 1:
            raise ValueError("divisor must be >= 1")
        self._read_score = read_score
        self.divisor = divisor
        self.displayed = 0

    @property
    def is_settled(self) -> bool:
        return self.displayed == self._read_score()

    def tick(self) -> int:
        self.displayed = step_toward(self.displayed, self._read_score(), self.divisor)
        return self.displayed

    def run(self) -> Iterator[int]:
        """Ticks until settled, yielding each displayed value."""
        while not self.is_settled:
            yield self.tick()

    def jump(self, value: int = 0) -> None:
        self.displayed = value
