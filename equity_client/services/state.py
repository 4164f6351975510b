"""Result lifecycle as immutable values plus a pure transition function.

    Empty --Submitted--> Loading --Succeeded--> Ready(result)
                                 --Failed-----> Errored(message)

Ready and Errored go back to Loading on the next Submitted. Entering
Loading drops whatever the previous state carried.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ..schemas.analysis import AnalysisResult


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Ready:
    result: AnalysisResult


@dataclass(frozen=True)
class Errored:
    message: str


ResultState = Union[Empty, Loading, Ready, Errored]

EMPTY = Empty()
LOADING = Loading()


@dataclass(frozen=True)
class Submitted:
    pass


@dataclass(frozen=True)
class Succeeded:
    result: AnalysisResult


@dataclass(frozen=True)
class Failed:
    message: str


Event = Union[Submitted, Succeeded, Failed]


def transition(state: ResultState, event: Event) -> ResultState:
    if isinstance(event, Submitted):
        # one request in flight at most
        return state if isinstance(state, Loading) else LOADING
    if not isinstance(state, Loading):
        # a resolution with nothing in flight is stale
        return state
    if isinstance(event, Succeeded):
        return Ready(event.result)
    if isinstance(event, Failed):
        return Errored(event.message)
    raise TypeError(f"unknown event: {event!r}")


def can_submit(state: ResultState) -> bool:
    return not isinstance(state, Loading)


def current_result(state: ResultState) -> Optional[AnalysisResult]:
    if isinstance(state, Ready):
        return state.result
    return None
