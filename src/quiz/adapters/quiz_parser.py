import json

from pydantic import ValidationError

from src.quiz.domain.errors import FetchFailed
from src.quiz.domain.models import Quiz


def parse_quiz(raw: str | None) -> Quiz:
    """
    Turns the generator's JSON text into a validated Quiz.
    Any rule violation rejects the whole payload; there are no partial quizzes.
    """
    if not raw:
        raise FetchFailed("No content received from the generator")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FetchFailed("Invalid JSON response from the generator") from e

    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        raise FetchFailed("Invalid quiz format: missing questions array")

    if not data["questions"]:
        raise FetchFailed("Invalid quiz format: no questions")

    try:
        return Quiz.model_validate({"questions": data["questions"]})
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        detail = f"{location}: {first['msg']}" if location else first["msg"]
        raise FetchFailed(f"Invalid question format: {detail}") from e
