import pytest
import streamlit as st

from src.config import ScoringMode
from src.quiz.domain.models import Quiz
from src.quiz.domain.session import SessionEngine
from tests.drivers.quiz_driver import make_mc_question, make_tf_question


class MockSessionState(dict):
    """
    Mock for st.session_state that behaves like both a dict and an object.
    Allows both dict-style and attribute-style access.
    """

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError as err:
            raise AttributeError(
                f"'MockSessionState' object has no attribute '{name}'"
            ) from err

    def __setattr__(self, name, value):
        self[name] = value

    def __delattr__(self, name):
        try:
            del self[name]
        except KeyError as err:
            raise AttributeError(
                f"'MockSessionState' object has no attribute '{name}'"
            ) from err


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def mock_streamlit_session():
    """
    Auto-use fixture that ensures st.session_state exists for all tests.
    Uses a custom MockSessionState that supports both dict and attribute access.
    """
    original_session_state = getattr(st, "session_state", None)

    # Replace with our mock
    st.session_state = MockSessionState()

    yield st.session_state

    # Cleanup
    st.session_state.clear()

    # Restore original if it existed
    if original_session_state is not None:
        st.session_state = original_session_state


@pytest.fixture
def mc_question():
    return make_mc_question()


@pytest.fixture
def tf_question():
    return make_tf_question()


@pytest.fixture
def sample_quiz():
    """Three questions; correct answers are Arbeiderpartiet, Sant, Høyre."""
    return Quiz(
        questions=[
            make_mc_question(),
            make_tf_question(),
            make_mc_question(text="Hvem gikk tilbake?", answer="Høyre"),
        ]
    )


@pytest.fixture
def engine():
    return SessionEngine(scoring_mode=ScoringMode.STREAK)


@pytest.fixture
def loaded_engine(engine, sample_quiz):
    engine.initialize(sample_quiz)
    return engine


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def quiz_payload():
    """Wire-format quiz as the generation service returns it."""
    return {
        "questions": [
            {
                "question": "Hvilket parti vokser i Trøndelag?",
                "type": "multipleChoice",
                "options": ["Arbeiderpartiet", "Høyre", "FrP", "SV"],
                "answer": "Arbeiderpartiet",
            },
            {
                "question": "Åge følte seg maktesløs. Sant eller usant?",
                "type": "trueOrFalse",
                "options": ["Sant", "Usant"],
                "answer": "Sant",
            },
        ]
    }
