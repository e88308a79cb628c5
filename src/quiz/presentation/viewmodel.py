from pydantic import BaseModel

from src.config import GameConfig
from src.fsm import SessionPhase
from src.quiz.domain.errors import FetchFailed
from src.quiz.domain.models import Question, Quiz
from src.quiz.domain.ports import IQuizSupplier
from src.quiz.domain.session import SessionEngine, SessionSummary
from src.quiz.presentation.state_provider import IStateProvider
from src.shared.telemetry import Telemetry, measure_time, record_fetch


# --- DTO for UI Configuration ---
class DashboardConfig(BaseModel):
    title: str
    progress_value: float = 0.0
    progress_text: str
    score: int = 0
    displayed_score: int = 0
    streak: int = 0
    best_streak: int = 0
    time_left: int | None = None
    low_time: bool = False


class QuizViewModel:
    """
    Glue between the rendering layer and the SessionEngine.

    Fetches are ticketed: only the response to the most recent request may
    initialize the engine, and no session mutation is accepted while a
    fetch is pending.
    """

    def __init__(self, supplier: IQuizSupplier, state_provider: IStateProvider):
        self.supplier = supplier
        self.state = state_provider
        self.telemetry = Telemetry("ViewModel")

        # Initialize Session Engine if missing
        if self.state.get("session_engine") is None:
            self.state.set("session_engine", SessionEngine())

    # --- Properties ---
    @property
    def engine(self) -> SessionEngine:
        return self.state.get("session_engine")

    @property
    def current_state(self) -> SessionPhase:
        return self.engine.phase

    @property
    def is_loading(self) -> bool:
        return bool(self.state.get("is_loading", False))

    @property
    def fetch_error(self) -> str | None:
        return self.state.get("fetch_error")

    @property
    def current_question(self) -> Question | None:
        return self.engine.current_question

    def get_dashboard_config(self) -> DashboardConfig:
        engine = self.engine
        total = engine.total_questions
        time_left = engine.time_left
        return DashboardConfig(
            title=GameConfig.APP_TITLE,
            progress_value=engine.progress_percentage / 100,
            progress_text=f"Spørsmål {engine.current_index + 1}/{total}",
            score=engine.score,
            displayed_score=engine.displayed_score,
            streak=engine.streak,
            best_streak=engine.best_streak,
            time_left=time_left,
            low_time=time_left is not None and time_left <= GameConfig.LOW_TIME_WARNING,
        )

    def get_summary(self) -> SessionSummary:
        return self.engine.summary()

    # --- Fetching ---

    def begin_fetch(self) -> int:
        ticket = int(self.state.get("fetch_ticket", 0)) + 1
        self.state.set("fetch_ticket", ticket)
        self.state.set("is_loading", True)
        self.state.set("fetch_error", None)
        self.telemetry.log_info("Fetch Started", ticket=ticket)
        return ticket

    def complete_fetch(
        self, ticket: int, quiz: Quiz | None = None, error: FetchFailed | None = None
    ) -> bool:
        """
        Delivers a fetch outcome. Returns True only if the engine was initialized.
        Outcomes of superseded requests are dropped.
        """
        latest = self.state.get("fetch_ticket", 0)
        if ticket != latest:
            record_fetch("stale")
            self.telemetry.log_warning("Stale Fetch Discarded", ticket=ticket, latest=latest)
            return False

        self.state.set("is_loading", False)

        if error is not None or quiz is None:
            reason = error.reason if error else "No quiz delivered"
            record_fetch("failed")
            self.state.set("fetch_error", f"{GameConfig.FETCH_ERROR_MESSAGE}: {reason}")
            self.telemetry.log_info("Fetch Failed", ticket=ticket, reason=reason)
            return False

        self.engine.initialize(quiz)
        record_fetch("success")
        return True

    @measure_time("fetch_quiz")
    def fetch_quiz(self) -> bool:
        Telemetry.start_trace()
        ticket = self.begin_fetch()
        try:
            quiz = self.supplier.fetch_quiz()
        except FetchFailed as e:
            return self.complete_fetch(ticket, error=e)
        except Exception:
            if ticket == self.state.get("fetch_ticket"):
                self.state.set("is_loading", False)
            raise
        return self.complete_fetch(ticket, quiz=quiz)

    # --- Actions ---

    def select_answer(self, option: str) -> bool:
        if self._blocked("select_answer"):
            return False
        return self.engine.select_answer(option)

    def check_answer(self) -> bool:
        if self._blocked("check_answer"):
            return False
        Telemetry.start_trace()
        return self.engine.check_answer()

    def next_step(self) -> bool:
        if self._blocked("advance"):
            return False
        return self.engine.advance()

    def restart(self) -> None:
        """Full restart: back to the start screen, best streak cleared."""
        Telemetry.start_trace()
        self._cancel_pending_fetch()
        self.engine.reset()
        self.state.set("fetch_error", None)

    def tick_clock(self) -> bool:
        """True when this tick ended the session because time ran out."""
        return self.engine.tick_clock()

    def tick(self) -> int:
        """One scheduler tick: countdown expiry check plus one animation step."""
        self.tick_clock()
        return self.engine.tick_animation()

    def _cancel_pending_fetch(self) -> None:
        if self.is_loading:
            # Bumping the ticket turns the in-flight response stale.
            self.state.set("fetch_ticket", int(self.state.get("fetch_ticket", 0)) + 1)
            self.state.set("is_loading", False)
            self.telemetry.log_info("Pending Fetch Cancelled")

    def _blocked(self, action: str) -> bool:
        if self.is_loading:
            self.telemetry.log_warning(f"Ignored while loading: {action}")
            return True
        return False
