import threading
from dataclasses import dataclass
from typing import Any

from src.config import GameConfig, Medal, ScoringMode
from src.fsm import SessionAction, SessionPhase, SessionStateMachine
from src.quiz.domain.animation import ScoreAnimator
from src.quiz.domain.models import Question, QuestionResult, Quiz, SessionState
from src.quiz.domain.scoring import Countdown, IScoringPolicy, ScoringRegistry
from src.shared.telemetry import Telemetry


@dataclass(frozen=True)
class SessionSummary:
    """Read-only view of a finished (or running) session."""

    score: int
    max_score: int
    correct_answers: int
    total_questions: int
    best_streak: int
    medal: Medal
    results: tuple[QuestionResult, ...]


class SessionEngine:
    """
    Owns SessionState and exposes the only legal transitions on it.

    Mutators that are called out of their state are no-ops and return False.
    All reads and writes go through one lock so a concurrent animation tick
    only ever sees a fully committed score.
    """

    def __init__(
        self,
        scoring_mode: ScoringMode = GameConfig.SCORING_MODE,
        policy: IScoringPolicy | None = None,
        countdown: Countdown | None = None,
    ) -> None:
        self.scoring_mode = scoring_mode
        self.policy = policy or ScoringRegistry.get(scoring_mode)
        self.countdown = countdown
        if self.countdown is None and self.policy.uses_countdown:
            self.countdown = Countdown()

        self._state = SessionState()
        self._fsm = SessionStateMachine()
        self._lock = threading.RLock()
        self.animator = ScoreAnimator(self._snapshot_score)
        self.telemetry = Telemetry("SessionEngine")

    def __getstate__(self) -> dict[str, Any]:
        """Pickling: Save everything EXCEPT the lock."""
        state = self.__dict__.copy()
        del state["_lock"]
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._lock = threading.RLock()

    # --- Accessors ---

    @property
    def phase(self) -> SessionPhase:
        with self._lock:
            return self._fsm.current_state

    @property
    def quiz(self) -> Quiz | None:
        with self._lock:
            return self._state.quiz

    @property
    def is_loaded(self) -> bool:
        return self.quiz is not None

    @property
    def total_questions(self) -> int:
        quiz = self.quiz
        return len(quiz) if quiz else 0

    @property
    def current_index(self) -> int:
        with self._lock:
            return self._state.current_index

    @property
    def current_question(self) -> Question | None:
        with self._lock:
            quiz = self._state.quiz
            idx = self._state.current_index
            if quiz and 0 <= idx < len(quiz):
                return quiz.questions[idx]
            return None

    @property
    def selected_answer(self) -> str | None:
        with self._lock:
            return self._state.selected_answer

    @property
    def answer_checked(self) -> bool:
        with self._lock:
            return self._state.answer_checked

    @property
    def score(self) -> int:
        return self._snapshot_score()

    @property
    def displayed_score(self) -> int:
        return self.animator.displayed

    @property
    def streak(self) -> int:
        with self._lock:
            return self._state.streak

    @property
    def best_streak(self) -> int:
        with self._lock:
            return self._state.best_streak

    @property
    def correct_answers(self) -> int:
        with self._lock:
            return self._state.correct_answers

    @property
    def results(self) -> tuple[QuestionResult, ...]:
        with self._lock:
            return tuple(self._state.results)

    @property
    def last_result(self) -> QuestionResult | None:
        with self._lock:
            if self._state.answer_checked and self._state.results:
                return self._state.results[-1]
            return None

    @property
    def time_left(self) -> int | None:
        """Seconds left on the shared countdown, or None in streak mode."""
        if self.countdown is None:
            return None
        return self.countdown.remaining()

    # --- Derived Values ---

    @property
    def is_last_question(self) -> bool:
        with self._lock:
            total = self.total_questions
            return total > 0 and self._state.current_index + 1 >= total

    @property
    def is_complete(self) -> bool:
        return self.phase == SessionPhase.COMPLETE

    @property
    def progress_percentage(self) -> float:
        with self._lock:
            total = self.total_questions
            if total == 0:
                return 0.0
            done = self._state.current_index + (1 if self.is_last_question else 0)
            return done / total * 100

    def summary(self) -> SessionSummary:
        with self._lock:
            return SessionSummary(
                score=self._state.score,
                max_score=GameConfig.max_score(self.total_questions),
                correct_answers=self._state.correct_answers,
                total_questions=self.total_questions,
                best_streak=self._state.best_streak,
                medal=Medal.for_score(self._state.score),
                results=tuple(self._state.results),
            )

    # --- Transitions ---

    def initialize(self, quiz: Quiz) -> None:
        """Soft reset onto a fresh quiz. Best streak carries over."""
        with self._lock:
            self._state.reset(quiz=quiz, keep_best_streak=True)
            self._fsm.transition(SessionAction.INITIALIZE)
            self.animator.jump(0)
            if self.countdown is not None:
                self.countdown.start()

        self.telemetry.log_info(
            "Session Initialized",
            questions=len(quiz),
            mode=self.scoring_mode.value,
            best_streak=self.best_streak,
        )

    def select_answer(self, option: str) -> bool:
        with self._lock:
            self._expire_if_due()
            if self._fsm.current_state != SessionPhase.QUESTION_ACTIVE:
                self._ignored("select_answer", self._fsm.current_state.name)
                return False
            # Foreign options are accepted; they can never match the answer.
            self._state.selected_answer = option
            return True

    def check_answer(self) -> bool:
        with self._lock:
            self._expire_if_due()
            question = self.current_question
            selected = self._state.selected_answer
            if (
                question is None
                or selected is None
                or self._state.answer_checked
                or not self._fsm.can(SessionAction.CHECK_ANSWER)
            ):
                self._ignored("check_answer", self._fsm.current_state.name)
                return False

            is_correct = question.is_correct(selected)
            points = 0
            if is_correct:
                self._state.streak += 1
                points = self.policy.points_for_correct(
                    self._state.streak, self.countdown
                )
                self._state.record_correct_answer(points)
            else:
                self._state.streak = 0

            self._state.results.append(
                QuestionResult(
                    correct=is_correct,
                    points=points,
                    selected=selected,
                    correct_answer=question.correct_answer,
                )
            )
            self._state.answer_checked = True
            self._fsm.transition(SessionAction.CHECK_ANSWER)

            self.telemetry.log_info(
                "Answer Checked",
                index=self._state.current_index,
                correct=is_correct,
                points=points,
                score=self._state.score,
                streak=self._state.streak,
            )
            return True

    def advance(self) -> bool:
        with self._lock:
            self._expire_if_due()
            if not self._state.answer_checked or not self._fsm.can(
                SessionAction.NEXT_QUESTION
            ):
                self._ignored("advance", self._fsm.current_state.name)
                return False

            if self.is_last_question:
                self._fsm.transition(SessionAction.FINISH_QUIZ)
                if self.countdown is not None:
                    self.countdown.stop()
                self.telemetry.log_info(
                    "Session Complete",
                    score=self._state.score,
                    correct=self._state.correct_answers,
                    total=self.total_questions,
                )
            else:
                self._state.next_question()
                self._fsm.transition(SessionAction.NEXT_QUESTION)
            return True

    def reset(self) -> None:
        """Hard reset: drops the quiz and every counter, best streak included."""
        with self._lock:
            self._state.reset(quiz=None, keep_best_streak=False)
            self._fsm.transition(SessionAction.RESET)
            self.animator.jump(0)
            if self.countdown is not None:
                self.countdown.clear()
        self.telemetry.log_info("Session Reset")

    # --- Clocks ---

    def tick_clock(self) -> bool:
        """Ends the session when the shared countdown has run out."""
        with self._lock:
            return self._expire_if_due()

    def tick_animation(self) -> int:
        return self.animator.tick()

    # --- Internals ---

    def _snapshot_score(self) -> int:
        with self._lock:
            return self._state.score

    def _expire_if_due(self) -> bool:
        if self.countdown is None or not self.countdown.is_expired():
            return False
        if not self._fsm.transition(SessionAction.TIME_UP):
            return False
        self.countdown.stop()
        self.telemetry.log_info(
            "Time Up",
            index=self._state.current_index,
            score=self._state.score,
        )
        return True

    def _ignored(self, operation: str, phase: str) -> None:
        self.telemetry.log_warning(f"Ignored: {operation}", phase=phase)
