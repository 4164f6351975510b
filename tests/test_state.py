from equity_client.schemas.analysis import AnalysisResult
from equity_client.services.state import (
    EMPTY,
    LOADING,
    Errored,
    Failed,
    Loading,
    Ready,
    Submitted,
    Succeeded,
    can_submit,
    current_result,
    transition,
)

RESULT = AnalysisResult(disclaimer="x")


def test_happy_path():
    s = transition(EMPTY, Submitted())
    assert s == LOADING
    s = transition(s, Succeeded(RESULT))
    assert s == Ready(RESULT)
    assert current_result(s) is RESULT


def test_failure_path():
    s = transition(transition(EMPTY, Submitted()), Failed("boom"))
    assert s == Errored("boom")
    assert current_result(s) is None


def test_resubmit_drops_previous_payload():
    assert transition(Ready(RESULT), Submitted()) == LOADING
    assert transition(Errored("boom"), Submitted()) == LOADING


def test_submit_while_loading_is_ignored():
    assert transition(LOADING, Submitted()) is LOADING
    assert not can_submit(LOADING)


def test_stale_resolution_ignored():
    assert transition(EMPTY, Succeeded(RESULT)) == EMPTY
    assert transition(Errored("a"), Failed("b")) == Errored("a")


def test_can_submit_outside_loading():
    for s in (EMPTY, Ready(RESULT), Errored("x")):
        assert can_submit(s)
    assert isinstance(LOADING, Loading)
