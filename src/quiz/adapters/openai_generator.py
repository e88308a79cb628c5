import json
import os
from typing import Any

from openai import APIConnectionError, APIStatusError, OpenAI, OpenAIError

from src.config import GameConfig
from src.quiz.domain.errors import FetchFailed
from src.quiz.domain.ports import IQuizGenerator
from src.shared.telemetry import Telemetry, measure_time

SYSTEM_PROMPT = (
    "You are a quiz generator that creates engaging news quiz questions. "
    "Always respond with valid JSON in the specified format."
)


def build_prompt(articles: list[dict[str, Any]]) -> str:
    sant, usant = GameConfig.TRUE_FALSE_OPTIONS
    return f"""
Create exactly {GameConfig.QUESTION_COUNT} quiz questions based on these news articles.
Mix both multiple-choice and true/false questions.
All questions and answers must be written in Norwegian.

Return your response in this exact JSON format:
{{
  "questions": [
    {{
      "question": "...",
      "type": "multipleChoice",
      "options": ["...", "...", "...", "..."],
      "answer": "..."
    }},
    {{
      "question": "... Sant eller usant?",
      "type": "trueOrFalse",
      "options": ["{sant}", "{usant}"],
      "answer": "{sant}"
    }}
  ]
}}

Rules:
- Multiple-choice questions have exactly {GameConfig.MULTIPLE_CHOICE_OPTIONS} options
- True/false questions always use exactly ["{sant}", "{usant}"] as options
- "answer" matches exactly one of the options
- Base every question on the articles only; do not fabricate information

Articles:
{json.dumps(articles, ensure_ascii=False, indent=2)}
"""


class OpenAIQuizGenerator(IQuizGenerator):
    def __init__(
        self,
        client: OpenAI | None = None,
        model: str = GameConfig.OPENAI_MODEL,
    ) -> None:
        self._client = client
        self.model = model
        self.telemetry = Telemetry("OpenAIQuizGenerator")

    @property
    def client(self) -> OpenAI:
        # Created lazily so a missing key only fails the fetch, not app start-up.
        if self._client is None:
            try:
                self._client = OpenAI(api_key=os.getenv("OPENAI_API_KEY"))
            except OpenAIError as e:
                raise FetchFailed("Generation service is not configured") from e
        return self._client

    @measure_time("generate_quiz")
    def generate(self, articles: list[dict[str, Any]]) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(articles)},
                ],
                response_format={"type": "json_object"},
                temperature=GameConfig.OPENAI_TEMPERATURE,
                max_tokens=GameConfig.OPENAI_MAX_TOKENS,
            )
        except APIConnectionError as e:
            raise FetchFailed("Network error while contacting the generator") from e
        except APIStatusError as e:
            raise FetchFailed(f"Generator returned HTTP {e.status_code}") from e
        except OpenAIError as e:
            raise FetchFailed("Generator request failed") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise FetchFailed("No content received from the generator")
        return content
