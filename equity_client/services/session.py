import logging
from typing import Callable, List

from .client import AnalysisClient
from .request_builder import FormState, build_request
from .state import (
    EMPTY,
    Failed,
    ResultState,
    Submitted,
    Succeeded,
    can_submit,
    transition,
)

logger = logging.getLogger("services.session")

GENERIC_ERROR = "Something went wrong"

Listener = Callable[[ResultState], None]


class SubmissionInProgress(RuntimeError):
    pass


def error_message(exc: BaseException) -> str:
    return str(exc).strip() or GENERIC_ERROR


class AnalysisSession:
    """Owns the current ResultState and runs submissions one at a time."""

    def __init__(self, client: AnalysisClient):
        self.client = client
        self.state: ResultState = EMPTY
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _set(self, state: ResultState) -> None:
        self.state = state
        for listener in list(self._listeners):
            listener(state)

    def clear(self) -> None:
        if can_submit(self.state):
            self._set(EMPTY)

    def submit(self, form: FormState) -> ResultState:
        if not can_submit(self.state):
            raise SubmissionInProgress("an analysis is already running")

        outcome = Failed(GENERIC_ERROR)
        try:
            self._set(transition(self.state, Submitted()))
            request = build_request(form)
            outcome = Succeeded(self.client.submit(request))
        except Exception as e:
            logger.warning("analysis failed: %s", e)
            outcome = Failed(error_message(e))
        finally:
            # Loading never outlives the call
            self._set(transition(self.state, outcome))
        return self.state
