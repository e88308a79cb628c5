from enum import Enum, auto
import logging

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    EMPTY = auto()  # No quiz loaded
    QUESTION_ACTIVE = auto()  # Current question unchecked, selection allowed
    FEEDBACK_VIEW = auto()  # Current question checked, answer locked
    COMPLETE = auto()  # Advanced past the last question, read-only


class SessionAction(Enum):
    INITIALIZE = auto()
    CHECK_ANSWER = auto()
    NEXT_QUESTION = auto()
    FINISH_QUIZ = auto()
    TIME_UP = auto()
    RESET = auto()


class SessionStateMachine:
    """
    Pure FSM Logic.
    Only knows which transitions are legal, not what they do to the session.
    """

    def __init__(self, initial_state=SessionPhase.EMPTY):
        self._state = initial_state

    @property
    def current_state(self) -> SessionPhase:
        return self._state

    def can(self, action: SessionAction) -> bool:
        return self._target(action) is not None

    def transition(self, action: SessionAction) -> bool:
        """
        Applies the transition table.
        Returns False (and leaves the state alone) for an illegal action.
        """
        previous = self._state
        target = self._target(action)

        if target is None:
            logger.error(f"⛔ INVALID TRANSITION: {self._state.name} + {action.name}")
            return False

        self._state = target
        logger.info(f"🔄 FSM: {previous.name} --[{action.name}]--> {self._state.name}")
        return True

    def _target(self, action: SessionAction) -> SessionPhase | None:
        match (self._state, action):
            # Any -> ACTIVE (a fresh quiz replaces whatever was running)
            case (_, SessionAction.INITIALIZE):
                return SessionPhase.QUESTION_ACTIVE

            # ACTIVE -> FEEDBACK
            case (SessionPhase.QUESTION_ACTIVE, SessionAction.CHECK_ANSWER):
                return SessionPhase.FEEDBACK_VIEW

            # FEEDBACK -> ACTIVE (Next) or COMPLETE (Finish)
            case (SessionPhase.FEEDBACK_VIEW, SessionAction.NEXT_QUESTION):
                return SessionPhase.QUESTION_ACTIVE
            case (SessionPhase.FEEDBACK_VIEW, SessionAction.FINISH_QUIZ):
                return SessionPhase.COMPLETE

            # Countdown expiry ends a running quiz
            case (
                SessionPhase.QUESTION_ACTIVE | SessionPhase.FEEDBACK_VIEW,
                SessionAction.TIME_UP,
            ):
                return SessionPhase.COMPLETE

            # RESET Logic
            case (_, SessionAction.RESET):
                return SessionPhase.EMPTY

            case _:
                return None
