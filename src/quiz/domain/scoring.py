import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from src.config import GameConfig, ScoringMode


class Countdown:
    """
    A single countdown shared by a whole quiz.
    Remaining time is derived from a clock, so any scheduler (or none) can drive it.
    """

    def __init__(
        self,
        duration: int = GameConfig.INITIAL_TIME,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.duration = duration
        self._clock = clock
        self._started_at: float | None = None
        self._frozen_at: int | None = None

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        self._started_at = self._clock()
        self._frozen_at = None

    def stop(self) -> None:
        """Stops counting and keeps reporting the time that was left."""
        self._frozen_at = self.remaining()
        self._started_at = None

    def clear(self) -> None:
        self._started_at = None
        self._frozen_at = None

    def remaining(self) -> int:
        """Whole seconds left. An idle countdown reports its full duration."""
        if self._started_at is None:
            return self.duration if self._frozen_at is None else self._frozen_at
        elapsed = int(self._clock() - self._started_at)
        return max(0, self.duration - elapsed)

    def is_expired(self) -> bool:
        return self.is_running and self.remaining() <= 0


# --- Interface ---
class IScoringPolicy(ABC):
    uses_countdown: bool = False

    @abstractmethod
    def points_for_correct(self, streak: int, countdown: Countdown | None) -> int:
        """Points for a correct answer; `streak` already includes this answer."""
        pass


# --- Concrete Policies ---
class StreakScoring(IScoringPolicy):
    def __init__(
        self,
        base_points: int = GameConfig.BASE_POINTS,
        bonus_points: int = GameConfig.BONUS_POINTS,
    ) -> None:
        self.base_points = base_points
        self.bonus_points = bonus_points

    def points_for_correct(self, streak: int, countdown: Countdown | None) -> int:
        if streak <= 1:
            return self.base_points
        return self.base_points + self.bonus_points


class TimeBonusScoring(IScoringPolicy):
    uses_countdown = True

    def __init__(
        self,
        base_points: int = GameConfig.BASE_POINTS,
        max_bonus: int = GameConfig.MAX_TIME_BONUS,
    ) -> None:
        self.base_points = base_points
        self.max_bonus = max_bonus

    def points_for_correct(self, streak: int, countdown: Countdown | None) -> int:
        if countdown is None or countdown.duration <= 0:
            return self.base_points
        bonus = countdown.remaining() * self.max_bonus // countdown.duration
        return self.base_points + max(0, bonus)


# --- Registry (OCP) ---
class ScoringRegistry:
    _policies: dict[ScoringMode, IScoringPolicy] = {}

    @classmethod
    def register(cls, mode: ScoringMode, policy: IScoringPolicy) -> None:
        cls._policies[mode] = policy

    @classmethod
    def get(cls, mode: ScoringMode) -> IScoringPolicy:
        return cls._policies.get(mode, cls._policies[ScoringMode.STREAK])


ScoringRegistry.register(ScoringMode.STREAK, StreakScoring())
ScoringRegistry.register(ScoringMode.TIMER, TimeBonusScoring())
