"""Tests for the console runner."""

import io

import pytest

from config import Config
from core.constants import FailureKind
from main import build_parser, main, run_draws, submit_count
from renderers import ConsoleRenderer
from services.session import SessionController
from utils.performance import PerformanceMonitor


def test_first_submit_adds_then_appends(session):
    assert submit_count(session, "5").ok
    assert submit_count(session, " 2 ").ok

    assert [p.id for p in session.participants] == [1, 2, 3, 4, 5, 6, 7]


def test_submit_rejects_bad_input(session, recorder):
    result = submit_count(session, "many")

    assert result.error is FailureKind.INVALID_COUNT
    assert recorder.of("operation_failed") == [(FailureKind.INVALID_COUNT, "Enter a whole number")]
    assert not session.has_participants


def test_submit_uses_configured_maximum(make_session):
    session = make_session(max_participants=10)
    assert submit_count(session, "11").error is FailureKind.INVALID_COUNT


@pytest.mark.asyncio
async def test_run_draws_stops_when_pool_is_exhausted(make_rng):
    renderer = ConsoleRenderer(stream=io.StringIO(), show_previews=False)
    monitor = PerformanceMonitor()
    session = SessionController(
        Config(tick_interval_ms=1, emphasis_duration_ms=1),
        source=make_rng([0.2, 0.7]),
        listeners=[renderer, monitor],
    )
    submit_count(session, "3")

    completed = await run_draws(session, renderer, monitor, 5)

    assert completed == 3
    assert sorted(p.id for p in session.history) == [1, 2, 3]
    assert monitor.sample("randomizer_operations_total", operation="start_draw", outcome="done") == 4


@pytest.mark.asyncio
async def test_main_runs_draws_and_undo(capsys):
    args = build_parser().parse_args(["--count", "4", "--draws", "2", "--seed", "7", "--undo", "--quiet"])

    await main(args, Config(tick_interval_ms=1, colored_logs=False))

    output = capsys.readouterr().out
    assert output.count(">>> ") == 2
    assert "Last draw undone!" in output


@pytest.mark.asyncio
async def test_main_stops_on_invalid_count(capsys):
    args = build_parser().parse_args(["--count", "zero", "--quiet"])

    await main(args, Config(tick_interval_ms=1))

    output = capsys.readouterr().out
    assert "Enter a whole number" in output
    assert ">>> " not in output
