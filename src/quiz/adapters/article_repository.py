import json
import os
from typing import Any

from src.config import GameConfig
from src.quiz.domain.errors import FetchFailed
from src.quiz.domain.ports import IArticleRepository
from src.shared.telemetry import Telemetry


class FileArticleRepository(IArticleRepository):
    """
    Reads news articles from a directory: one JSON document per *.json file.
    """

    def __init__(self, articles_dir: str = GameConfig.ARTICLES_DIR) -> None:
        self.articles_dir = articles_dir
        self.telemetry = Telemetry("FileArticleRepository")

    def load_articles(self) -> list[dict[str, Any]]:
        try:
            files = sorted(
                f for f in os.listdir(self.articles_dir) if f.endswith(".json")
            )
            articles = []
            for name in files:
                path = os.path.join(self.articles_dir, name)
                with open(path, encoding="utf-8") as f:
                    articles.append(json.load(f))
        except (OSError, ValueError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            self.telemetry.log_error("Error loading articles", e, dir=self.articles_dir)
            raise FetchFailed("Failed to load articles") from e

        if not articles:
            raise FetchFailed("No articles found")

        self.telemetry.log_info("Articles Loaded", count=len(articles))
        return articles
