from abc import ABC, abstractmethod
from typing import Any

from src.quiz.domain.models import Quiz


class IArticleRepository(ABC):
    @abstractmethod
    def load_articles(self) -> list[dict[str, Any]]:
        """Returns every stored article. Raises FetchFailed if none can be read."""
        pass


class IQuizGenerator(ABC):
    @abstractmethod
    def generate(self, articles: list[dict[str, Any]]) -> str:
        """
        Asks the generation service for a quiz about the articles.
        Returns the raw JSON text of its answer.
        """
        pass


class IQuizSupplier(ABC):
    @abstractmethod
    def fetch_quiz(self) -> Quiz:
        """Produces a fully validated Quiz or raises FetchFailed."""
        pass
