# ==============================================================================
# ARCHITECTURE: FUNCTIONAL TEST (USER FLOWS)
# ------------------------------------------------------------------------------
# GOAL: Verify End-to-End User Scenarios via QuizViewModel.
# CONSTRAINTS:
#   1. DRIVER: Use 'tests.drivers.quiz_driver.QuizDriver' to play the quiz.
#   2. I/O: MOCKED. The supplier is a 'unittest.mock' stand-in.
# ==============================================================================
from unittest.mock import Mock

from src.config import GameConfig, Medal
from src.fsm import SessionPhase
from src.quiz.domain.errors import FetchFailed
from src.quiz.domain.models import Quiz
from src.quiz.presentation.state_provider import InMemoryStateProvider
from src.quiz.presentation.viewmodel import QuizViewModel
from tests.drivers.quiz_driver import QuizDriver, make_mc_question, make_tf_question


def driver_for(quiz=None, error=None) -> QuizDriver:
    supplier = Mock()
    if error is not None:
        supplier.fetch_quiz.side_effect = error
    else:
        supplier.fetch_quiz.return_value = quiz
    return QuizDriver(QuizViewModel(supplier, InMemoryStateProvider()))


def test_streak_scoring_walkthrough(sample_quiz):
    """Correct, correct, wrong, with the score after each check."""
    d = driver_for(sample_quiz).start()

    d.answer("Arbeiderpartiet").assert_score(10, streak=1)
    d.next().answer("Sant").assert_score(25, streak=2)
    d.next().answer("FrP").assert_score(25, streak=0)
    d.next().assert_phase(SessionPhase.COMPLETE)

    summary = d.vm.get_summary()
    assert summary.best_streak == 2
    assert summary.correct_answers == 2
    assert summary.medal == Medal.NONE


def test_perfect_five_question_round():
    questions = [make_mc_question() for _ in range(3)] + [
        make_tf_question() for _ in range(2)
    ]
    d = driver_for(Quiz(questions=questions)).start()

    d.play("Arbeiderpartiet", "Arbeiderpartiet", "Arbeiderpartiet", "Sant", "Sant")

    d.assert_phase(SessionPhase.COMPLETE).assert_score(10 + 4 * 15, streak=5)
    summary = d.vm.get_summary()
    assert summary.score == 70
    assert summary.max_score == GameConfig.max_score(5)
    assert summary.medal == Medal.SILVER


def test_empty_source_never_starts_a_session():
    d = driver_for(error=FetchFailed("No articles found")).start()

    d.assert_phase(SessionPhase.EMPTY)
    assert d.vm.fetch_error.endswith("No articles found")
    # Nothing to answer
    assert d.vm.select_answer("Sant") is False
    assert d.vm.check_answer() is False


def test_foreign_option_is_scored_as_wrong(sample_quiz):
    d = driver_for(sample_quiz).start()

    d.answer("Arbeiderpartiet").next().answer("Kanskje")

    d.assert_phase(SessionPhase.FEEDBACK_VIEW).assert_score(10, streak=0)
    assert d.engine.last_result.correct is False


def test_new_quiz_keeps_best_streak_restart_clears_it(sample_quiz):
    d = driver_for(sample_quiz).start()
    d.play("Arbeiderpartiet", "Sant", "Høyre")
    assert d.engine.best_streak == 3

    d.start()
    d.assert_phase(SessionPhase.QUESTION_ACTIVE).assert_score(0, streak=0)
    assert d.engine.best_streak == 3

    d.vm.restart()
    d.assert_phase(SessionPhase.EMPTY)
    assert d.engine.best_streak == 0


def test_checking_twice_does_not_double_score(sample_quiz):
    d = driver_for(sample_quiz).start()

    d.answer("Arbeiderpartiet")
    d.vm.check_answer()
    d.vm.select_answer("Høyre")

    d.assert_score(10, streak=1)
    assert d.engine.selected_answer == "Arbeiderpartiet"
