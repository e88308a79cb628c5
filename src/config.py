import logging
import os
from enum import Enum
from typing import Final

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class ScoringMode(str, Enum):
    STREAK = "streak"  # Base points + bonus for extending a streak
    TIMER = "timer"  # Base points + bonus from a shared countdown

    @classmethod
    def parse(cls, value: str) -> "ScoringMode":
        """Unknown values fall back to STREAK so a typo never stops the app."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            logger.warning(
                f"Unknown NEWSQUIZ_SCORING_MODE '{value}', using '{cls.STREAK.value}'"
            )
            return cls.STREAK


class Medal(Enum):
    # Enum Member = ("Label", "Icon", minimum score)
    GOLD = ("Gull", "🥇", 100)
    SILVER = ("Sølv", "🥈", 70)
    BRONZE = ("Bronse", "🥉", 40)
    NONE = ("Prøv igjen!", "😅", 0)

    def __init__(self, label: str, icon: str, threshold: int):
        self.label = label
        self.icon = icon
        self.threshold = threshold

    @property
    def title(self) -> str:
        return f"{self.icon} {self.label}"

    @classmethod
    def for_score(cls, score: int) -> "Medal":
        """Returns the best medal whose threshold the score reaches."""
        for medal in cls:
            if score >= medal.threshold:
                return medal
        return cls.NONE


class GameConfig:
    # --- App Identity ---
    APP_TITLE = "Nyhetsquiz"
    FETCH_ERROR_MESSAGE = "Kunne ikke generere quiz"

    # --- Question Rules ---
    QUESTION_COUNT: Final[int] = 5
    MULTIPLE_CHOICE_OPTIONS: Final[int] = 4
    TRUE_FALSE_OPTIONS: Final[tuple[str, str]] = ("Sant", "Usant")

    # --- Scoring ---
    SCORING_MODE = ScoringMode.parse(os.getenv("NEWSQUIZ_SCORING_MODE", "streak"))
    BASE_POINTS: Final[int] = 10
    BONUS_POINTS: Final[int] = 5

    # --- Timer Variant ---
    INITIAL_TIME: Final[int] = 60  # seconds, shared by the whole quiz
    MAX_TIME_BONUS: Final[int] = 5
    LOW_TIME_WARNING = 10

    # --- Score Animation ---
    SCORE_STEP_DIVISOR: Final[int] = 8
    SCORE_ANIMATION_INTERVAL_MS = 30

    # --- Supplier ---
    ARTICLES_DIR = os.getenv("NEWSQUIZ_ARTICLES_DIR", "data/articles")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TEMPERATURE = 0.7
    OPENAI_MAX_TOKENS = 1500

    @staticmethod
    def max_score(question_count: int) -> int:
        """Upper bound for the score bar: base plus full bonus on every question."""
        return question_count * (GameConfig.BASE_POINTS + GameConfig.BONUS_POINTS)
