from src.fsm import SessionPhase
from src.quiz.domain.models import Question, QuestionKind
from src.quiz.presentation.viewmodel import QuizViewModel


def make_mc_question(text="Hvilket parti vokser i Trøndelag?", answer="Arbeiderpartiet"):
    return Question(
        text=text,
        kind=QuestionKind.MULTIPLE_CHOICE,
        options=("Arbeiderpartiet", "Høyre", "FrP", "SV"),
        correct_answer=answer,
    )


def make_tf_question(text="Åge følte seg maktesløs. Sant eller usant?", answer="Sant"):
    return Question(
        text=text,
        kind=QuestionKind.TRUE_FALSE,
        options=("Sant", "Usant"),
        correct_answer=answer,
    )


class QuizDriver:
    """Plays a quiz through the view model the way the UI buttons would."""

    def __init__(self, vm: QuizViewModel):
        self.vm = vm

    @property
    def engine(self):
        return self.vm.engine

    def start(self):
        self.vm.fetch_quiz()
        return self

    def answer(self, option: str):
        """Select + check, like picking an option and pressing 'Sjekk svar'."""
        self.vm.select_answer(option)
        self.vm.check_answer()
        return self

    def next(self):
        self.vm.next_step()
        return self

    def play(self, *options: str):
        for option in options:
            self.answer(option).next()
        return self

    def assert_phase(self, phase: SessionPhase):
        assert self.vm.current_state == phase, (
            f"Expected phase '{phase.name}', but got '{self.vm.current_state.name}'"
        )
        return self

    def assert_score(self, score: int, streak: int | None = None):
        assert self.engine.score == score, f"Expected score {score}, got {self.engine.score}"
        if streak is not None:
            assert self.engine.streak == streak, (
                f"Expected streak {streak}, got {self.engine.streak}"
            )
        return self
