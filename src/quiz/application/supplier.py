from src.quiz.adapters.quiz_parser import parse_quiz
from src.quiz.domain.errors import FetchFailed
from src.quiz.domain.models import Quiz
from src.quiz.domain.ports import IArticleRepository, IQuizGenerator, IQuizSupplier
from src.shared.telemetry import Telemetry, measure_time


class NewsQuizSupplier(IQuizSupplier):
    """
    Articles -> generation service -> validated Quiz.
    Every failure on the way comes out as FetchFailed.
    """

    def __init__(self, articles: IArticleRepository, generator: IQuizGenerator):
        self.articles = articles
        self.generator = generator
        self.telemetry = Telemetry("NewsQuizSupplier")

    @measure_time("fetch_quiz")
    def fetch_quiz(self) -> Quiz:
        articles = self.articles.load_articles()
        if not articles:
            raise FetchFailed("No articles found")

        raw = self.generator.generate(articles)
        quiz = parse_quiz(raw)

        self.telemetry.log_info(
            "Quiz Supplied", articles=len(articles), questions=len(quiz)
        )
        return quiz
