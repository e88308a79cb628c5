# ==============================================================================
# ARCHITECTURE: UNIT TEST (CORE LOGIC)
# ------------------------------------------------------------------------------
# GOAL: Verify the invariants carried by Question / Quiz / SessionState.
# CONSTRAINTS:
#   1. EXECUTION: FAST (< 50ms per test).
#   2. I/O: FORBIDDEN. No Database, No Network, No File System.
# ==============================================================================
import pytest
from pydantic import ValidationError

from src.quiz.domain.models import Question, QuestionKind, Quiz, SessionState


def test_question_accepts_wire_aliases():
    q = Question.model_validate(
        {
            "question": "Hvem vant?",
            "type": "multipleChoice",
            "options": ["A", "B", "C", "D"],
            "answer": "C",
        }
    )

    assert q.text == "Hvem vant?"
    assert q.kind == QuestionKind.MULTIPLE_CHOICE
    assert q.options == ("A", "B", "C", "D")
    assert q.correct_answer == "C"


def test_question_is_immutable(mc_question):
    with pytest.raises(ValidationError):
        mc_question.correct_answer = "Høyre"


def test_answer_must_be_one_of_the_options():
    with pytest.raises(ValidationError, match="Answer not found in options"):
        Question(
            text="?",
            kind=QuestionKind.MULTIPLE_CHOICE,
            options=("A", "B", "C", "D"),
            correct_answer="E",
        )


@pytest.mark.parametrize("options", [("A", "B", "C"), ("A", "B", "C", "D", "E")])
def test_multiple_choice_needs_exactly_four_options(options):
    with pytest.raises(ValidationError, match="exactly 4 options"):
        Question(
            text="?",
            kind=QuestionKind.MULTIPLE_CHOICE,
            options=options,
            correct_answer="A",
        )


def test_options_must_be_unique():
    with pytest.raises(ValidationError, match="unique"):
        Question(
            text="?",
            kind=QuestionKind.MULTIPLE_CHOICE,
            options=("A", "A", "B", "C"),
            correct_answer="A",
        )


@pytest.mark.parametrize(
    "options",
    [("Usant", "Sant"), ("Ja", "Nei"), ("Sant",), ("Sant", "Usant", "Vet ikke")],
)
def test_true_false_uses_exactly_the_fixed_labels(options):
    with pytest.raises(ValidationError, match="True/false options"):
        Question(
            text="?",
            kind=QuestionKind.TRUE_FALSE,
            options=options,
            correct_answer=options[0],
        )


def test_unknown_kind_is_rejected():
    with pytest.raises(ValidationError):
        Question.model_validate(
            {"question": "?", "type": "essay", "options": ["Sant", "Usant"], "answer": "Sant"}
        )


def test_empty_options_are_rejected():
    with pytest.raises(ValidationError):
        Question(text="?", kind=QuestionKind.TRUE_FALSE, options=(), correct_answer="Sant")


def test_quiz_needs_at_least_one_question():
    with pytest.raises(ValidationError):
        Quiz(questions=[])


def test_quiz_length(sample_quiz):
    assert len(sample_quiz) == 3


def test_is_correct_uses_exact_string_equality(mc_question):
    assert mc_question.is_correct("Arbeiderpartiet") is True
    assert mc_question.is_correct("arbeiderpartiet") is False
    assert mc_question.is_correct(None) is False


def test_session_state_reset_keeps_best_streak_by_default(sample_quiz):
    state = SessionState(score=25, streak=2, best_streak=4, correct_answers=2)

    state.reset(quiz=sample_quiz)

    assert state.quiz is sample_quiz
    assert (state.score, state.streak, state.correct_answers) == (0, 0, 0)
    assert state.best_streak == 4


def test_session_state_hard_reset_clears_best_streak():
    state = SessionState(best_streak=4)

    state.reset(keep_best_streak=False)

    assert state.best_streak == 0
    assert state.quiz is None
