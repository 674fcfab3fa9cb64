"""Tests for request sequencing."""

from __future__ import annotations

from smart_weather.search.sequencer import RequestSequencer


def test_issue_is_monotonic() -> None:
    sequencer = RequestSequencer()
    assert [sequencer.issue() for _ in range(3)] == [1, 2, 3]
    assert sequencer.issued == 3
    assert sequencer.applied == 0


def test_out_of_order_response_is_rejected() -> None:
    sequencer = RequestSequencer()
    first = sequencer.issue()
    second = sequencer.issue()

    assert sequencer.accept(second) is True
    assert sequencer.is_stale(first) is True
    assert sequencer.accept(first) is False
    assert sequencer.applied == second


def test_in_order_responses_are_both_applied() -> None:
    sequencer = RequestSequencer()
    first = sequencer.issue()
    second = sequencer.issue()

    assert sequencer.accept(first) is True
    assert sequencer.accept(second) is True


def test_invalidate_marks_everything_in_flight_stale() -> None:
    sequencer = RequestSequencer()
    pending = sequencer.issue()
    sequencer.invalidate()

    assert sequencer.accept(pending) is False
    assert sequencer.accept(sequencer.issue()) is True
