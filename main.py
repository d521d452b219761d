"""Application entry point: runs draws in the terminal.

Example:
  python main.py --count 12 --draws 3 --seed 42
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Optional, Sequence

from prometheus_client import start_http_server

from config import Config, load_config
from core import get_logger, setup_logger
from core.exceptions import InvalidCountError
from renderers import Announcer, ConsoleRenderer
from services import OperationResult, SessionController, default_source
from utils.performance import PerformanceMonitor
from utils.validators import parse_count

logger = get_logger(__name__)


def submit_count(session: SessionController, raw: str) -> OperationResult:
    """Handle the count field: first batch starts the session, later ones add more."""
    try:
        count = parse_count(
            raw,
            min_count=session.config.min_participants,
            max_count=session.config.max_participants,
        )
    except InvalidCountError as e:
        logger.warning(f"Rejected count input {raw!r}: {e.message}")
        session.notifier.operation_failed(e.kind, e.message)
        return OperationResult(ok=False, message=e.message, error=e.kind)

    if session.has_participants:
        return session.add_more(count)
    return session.add_participants(count)


async def run_draws(
    session: SessionController,
    renderer: ConsoleRenderer,
    monitor: PerformanceMonitor,
    draws: int,
) -> int:
    """Run up to ``draws`` reveals back to back; return how many committed."""
    completed = 0
    for _ in range(draws):
        renderer.draw_finished.clear()
        with monitor.track_operation("start_draw"):
            result = session.start_draw()
        if not result.ok:
            break
        await renderer.draw_finished.wait()
        completed += 1
    return completed


async def main(args: argparse.Namespace, config: Config) -> None:
    """Main application entry point."""
    renderer = ConsoleRenderer(show_previews=not args.quiet)
    announcer = Announcer()
    monitor = PerformanceMonitor()

    if config.metrics_port:
        start_http_server(config.metrics_port, registry=monitor.registry)
        logger.info(f"Metrics exposed on port {config.metrics_port}")

    session = SessionController(
        config,
        source=default_source(args.seed),
        listeners=[renderer, announcer, monitor],
    )

    with monitor.track_operation("submit_count"):
        result = submit_count(session, args.count)
    if not result.ok:
        return

    completed = await run_draws(session, renderer, monitor, args.draws)

    if args.undo and completed:
        with monitor.track_operation("undo_last"):
            session.undo_last()

    drawn = ", ".join(p.name for p in session.history) or "-"
    logger.info(f"Session finished: {completed} draw(s), drawn so far: {drawn}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Draw participants one at a time")
    parser.add_argument("--count", default="10", help="Number of participants")
    parser.add_argument("--draws", type=int, default=1, help="Number of draws to run")
    parser.add_argument("--seed", type=int, default=None, help="Optional seed")
    parser.add_argument("--undo", action="store_true", help="Undo the last draw at the end")
    parser.add_argument("--quiet", action="store_true", help="Hide preview ticks")
    parser.add_argument("--env-file", default=None, help="Path to a .env file")
    return parser


def cli(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    config = load_config(args.env_file)
    setup_logger(level=config.log_level, log_file=config.log_file, colored=config.colored_logs)

    try:
        asyncio.run(main(args, config))
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)


if __name__ == "__main__":
    cli()
