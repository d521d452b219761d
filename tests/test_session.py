"""Tests for SessionController sequencing and notifications."""

import pytest

from core.constants import DrawState, FailureKind, StatusLevel
from services.notifications import SessionListener


def _state(session):
    return session.participants, session.remaining, session.history


def _draw(session, scheduler):
    result = session.start_draw()
    assert result.ok
    scheduler.run_until_idle()
    return session.current_participant


def test_add_participants_publishes_fresh_pool(session, recorder):
    result = session.add_participants(5)

    assert result.ok
    all_, remaining, history = recorder.of("participants_changed")[-1]
    assert [p.id for p in all_] == [1, 2, 3, 4, 5]
    assert remaining == all_
    assert history == ()
    assert recorder.of("selection_changed") == [None]
    assert session.has_participants


def test_add_participants_invalid_count_changes_nothing(session, recorder):
    session.add_participants(3)
    before = _state(session)
    recorder.clear()

    result = session.add_participants(1001)

    assert not result.ok
    assert result.error is FailureKind.INVALID_COUNT
    assert recorder.of("operation_failed") == [(FailureKind.INVALID_COUNT, "Maximum 1000 participants")]
    assert recorder.of("participants_changed") == []
    assert _state(session) == before


def test_add_participants_clears_undo(session, scheduler):
    session.add_participants(3)
    _draw(session, scheduler)
    assert session.can_undo

    session.add_participants(4)

    assert not session.can_undo
    assert session.undo_depth == 0
    assert session.history == ()


def test_add_more_scenario(session):
    session.add_participants(5)

    result = session.add_more(2)

    assert result.ok
    assert [p.id for p in session.participants][-2:] == [6, 7]
    assert len(session.participants) == 7


def test_add_more_keeps_history_and_undo(session, scheduler):
    session.add_participants(3)
    winner = _draw(session, scheduler)

    session.add_more(2)

    assert session.history == (winner,)
    assert session.undo_depth == 1


@pytest.mark.parametrize("operation", ["add_participants", "add_more"])
def test_adding_during_draw_is_refused(session, recorder, operation):
    session.add_participants(3)
    session.start_draw()
    before = _state(session)

    result = getattr(session, operation)(2)

    assert result.error is FailureKind.DRAW_IN_PROGRESS
    assert recorder.of("operation_failed")[-1][0] is FailureKind.DRAW_IN_PROGRESS
    assert _state(session) == before
    assert session.is_drawing


def test_start_draw_reveals_winner(session, scheduler, recorder):
    session.add_participants(3)

    result = session.start_draw()

    assert result.ok
    assert session.is_drawing
    assert session.state is DrawState.RUNNING
    scheduler.run_until_idle()
    assert not session.is_drawing
    winner = recorder.of("winner_revealed")[0]
    assert session.history == (winner,)
    assert recorder.of("selection_changed")[-1] == winner
    assert recorder.of("status_updated")[-1] == (f"Picked: {winner.name}. Remaining: 2", StatusLevel.SUCCESS)


def test_last_draw_reports_everyone_drawn(session, scheduler, recorder):
    session.add_participants(1)
    winner = _draw(session, scheduler)

    message, level = recorder.of("status_updated")[-1]
    assert level is StatusLevel.WARNING
    assert winner.name in message


def test_start_draw_after_pool_exhausted(session, scheduler, recorder):
    session.add_participants(1)
    _draw(session, scheduler)

    result = session.start_draw()

    assert result.error is FailureKind.POOL_EXHAUSTED
    assert recorder.of("operation_failed")[-1][0] is FailureKind.POOL_EXHAUSTED
    assert scheduler.active_timers == []


def test_start_draw_on_empty_session(session):
    assert session.start_draw().error is FailureKind.POOL_EXHAUSTED


def test_start_draw_while_running(session, scheduler):
    session.add_participants(4)
    session.start_draw()

    result = session.start_draw()

    assert result.error is FailureKind.DRAW_IN_PROGRESS
    assert len(scheduler.repeating_timers) == 1


def test_undo_restores_previous_current(session, scheduler, recorder):
    session.add_participants(5)
    first = _draw(session, scheduler)
    _draw(session, scheduler)

    result = session.undo_last()

    assert result.ok
    assert session.history == (first,)
    assert session.current_participant == first
    assert recorder.of("selection_changed")[-1] == first


def test_undo_to_empty_history_shows_no_selection(session, scheduler, recorder):
    session.add_participants(2)
    before = _state(session)
    _draw(session, scheduler)

    session.undo_last()

    assert _state(session) == before
    assert session.current_participant is None
    assert recorder.of("selection_changed")[-1] is None


def test_undo_with_nothing_to_undo(session, recorder):
    session.add_participants(2)

    result = session.undo_last()

    assert result.error is FailureKind.NOTHING_TO_UNDO
    assert recorder.of("operation_failed") == [(FailureKind.NOTHING_TO_UNDO, "Nothing to undo")]


def test_undo_restores_interleaved_add_more(session, scheduler):
    session.add_participants(3)
    session.add_more(2)
    before = _state(session)
    _draw(session, scheduler)

    session.undo_last()

    assert _state(session) == before


def test_undo_depth_is_bounded(make_session, scheduler):
    session = make_session()
    session.add_participants(15)
    for _ in range(12):
        _draw(session, scheduler)

    assert session.undo_depth == 10
    for _ in range(10):
        assert session.undo_last().ok
    assert len(session.history) == 2
    assert session.undo_last().error is FailureKind.NOTHING_TO_UNDO


def test_reset_all_cancels_running_draw(session, scheduler, recorder):
    session.add_participants(4)
    session.start_draw()
    scheduler.advance(160)

    result = session.reset_all()

    assert result.ok
    assert not session.is_drawing
    assert scheduler.active_timers == []
    assert _state(session) == ((), (), ())
    assert not session.can_undo
    scheduler.advance(5000)
    assert recorder.of("winner_revealed") == []
    assert recorder.of("selection_changed")[-1] is None


def test_reset_all_when_idle_never_fails(session):
    assert session.reset_all().ok
    assert session.reset_all().ok
    assert not session.has_participants


def test_return_to_pool_flow(session, scheduler, recorder):
    session.add_participants(3)
    winner = _draw(session, scheduler)

    result = session.return_to_pool(winner.id)

    assert result.ok
    assert result.participant == winner
    assert [p.id for p in session.remaining] == [1, 2, 3]
    assert session.history == ()
    assert session.current_participant is None


def test_return_to_pool_twice(session, scheduler, recorder):
    session.add_participants(3)
    winner = _draw(session, scheduler)
    session.return_to_pool(winner.id)
    after_first = _state(session)

    result = session.return_to_pool(winner.id)

    assert result.error is FailureKind.ALREADY_AVAILABLE
    assert _state(session) == after_first


def test_return_unknown_participant(session):
    session.add_participants(3)
    assert session.return_to_pool(42).error is FailureKind.NOT_FOUND


def test_return_to_pool_allowed_while_drawing(session, scheduler):
    session.add_participants(3)
    winner = _draw(session, scheduler)
    session.start_draw()

    assert session.return_to_pool(winner.id).ok
    scheduler.run_until_idle()
    assert len(session.history) == 1


def test_failing_listener_does_not_break_session(session, scheduler):
    class Broken(SessionListener):
        def participants_changed(self, all_, remaining, history):
            raise RuntimeError("render failed")

    session.subscribe(Broken())

    assert session.add_participants(2).ok
    assert _draw(session, scheduler) is not None
