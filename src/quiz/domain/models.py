from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.config import GameConfig


# --- Enums ---
class QuestionKind(str, Enum):
    MULTIPLE_CHOICE = "multipleChoice"
    TRUE_FALSE = "trueOrFalse"


# --- Entities ---
class Question(BaseModel):
    """
    One quiz question as delivered by the generation service.
    Field aliases match the wire format: question / type / options / answer.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(alias="question", min_length=1)
    kind: QuestionKind = Field(alias="type")
    options: tuple[str, ...] = Field(min_length=1)
    correct_answer: str = Field(alias="answer", min_length=1)

    @model_validator(mode="after")
    def check_options(self) -> "Question":
        if len(set(self.options)) != len(self.options):
            raise ValueError("Options must be unique within a question")

        if self.correct_answer not in self.options:
            raise ValueError("Answer not found in options")

        if self.kind == QuestionKind.MULTIPLE_CHOICE:
            if len(self.options) != GameConfig.MULTIPLE_CHOICE_OPTIONS:
                raise ValueError(
                    f"Multiple choice needs exactly "
                    f"{GameConfig.MULTIPLE_CHOICE_OPTIONS} options"
                )
        elif self.options != GameConfig.TRUE_FALSE_OPTIONS:
            raise ValueError(
                f"True/false options must be exactly {list(GameConfig.TRUE_FALSE_OPTIONS)}"
            )
        return self

    def is_correct(self, selected: str | None) -> bool:
        return selected is not None and selected == self.correct_answer


class Quiz(BaseModel):
    model_config = ConfigDict(frozen=True)

    questions: tuple[Question, ...] = Field(min_length=1)

    def __len__(self) -> int:
        return len(self.questions)


# --- (Data Transfer Object) ---
@dataclass(frozen=True)
class QuestionResult:
    """Outcome of one checked question, kept for the summary screen."""

    correct: bool
    points: int
    selected: str | None
    correct_answer: str


class SessionState(BaseModel):
    """
    Encapsulates the state of a running quiz.
    Only SessionEngine mutates it.
    """

    quiz: Quiz | None = None
    current_index: int = 0
    selected_answer: str | None = None
    answer_checked: bool = False
    score: int = 0
    streak: int = 0
    best_streak: int = 0
    correct_answers: int = 0
    results: list[QuestionResult] = []

    def record_correct_answer(self, points: int) -> None:
        self.score += points
        self.correct_answers += 1
        self.best_streak = max(self.best_streak, self.streak)

    def next_question(self) -> None:
        self.current_index += 1
        self.selected_answer = None
        self.answer_checked = False

    def reset(self, quiz: Quiz | None = None, keep_best_streak: bool = True) -> None:
        self.quiz = quiz
        self.current_index = 0
        self.selected_answer = None
        self.answer_checked = False
        self.score = 0
        self.streak = 0
        self.correct_answers = 0
        self.results = []
        if not keep_best_streak:
            self.best_streak = 0
