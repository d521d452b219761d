"""Pytest configuration and fixtures."""

import dataclasses
import itertools

import pytest

from config import Config
from services.notifications import SessionListener
from services.session import SessionController


class FixedRandom:
    """Random source that replays a fixed sequence forever."""

    def __init__(self, values=(0.0,)):
        self.values = list(values)
        self._cycle = itertools.cycle(self.values)
        self.calls = 0

    def random(self):
        self.calls += 1
        return next(self._cycle)


class ManualTimer:
    def __init__(self, scheduler, due, callback, interval=None):
        self.scheduler = scheduler
        self.due = due
        self.callback = callback
        self.interval = interval
        self.seq = next(scheduler._seq)
        self._active = True

    @property
    def active(self):
        return self._active

    def cancel(self):
        self._active = False


class ManualScheduler:
    """Virtual clock; nothing fires until the test advances time."""

    def __init__(self):
        self.now = 0
        self.timers = []
        self._seq = itertools.count()

    def call_later(self, delay_ms, callback):
        timer = ManualTimer(self, self.now + delay_ms, callback)
        self.timers.append(timer)
        return timer

    def call_repeating(self, interval_ms, callback):
        timer = ManualTimer(self, self.now + interval_ms, callback, interval=interval_ms)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self):
        return [t for t in self.timers if t.active]

    @property
    def repeating_timers(self):
        return [t for t in self.active_timers if t.interval is not None]

    def advance(self, ms):
        target = self.now + ms
        while True:
            due = [t for t in self.active_timers if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self.now = timer.due
            if timer.interval is None:
                timer._active = False
            timer.callback()
            if timer.interval is not None and timer.active:
                timer.due += timer.interval
        self.now = target

    def run_until_idle(self, step=10, limit=100000):
        elapsed = 0
        while self.active_timers and elapsed < limit:
            self.advance(step)
            elapsed += step


class RecordingListener(SessionListener):
    def __init__(self):
        self.events = []

    def participants_changed(self, all_, remaining, history):
        self.events.append(("participants_changed", (tuple(all_), tuple(remaining), tuple(history))))

    def preview_tick(self, name):
        self.events.append(("preview_tick", name))

    def emphasis_pulse(self):
        self.events.append(("emphasis_pulse", None))

    def emphasis_cleared(self):
        self.events.append(("emphasis_cleared", None))

    def winner_revealed(self, participant):
        self.events.append(("winner_revealed", participant))

    def selection_changed(self, participant):
        self.events.append(("selection_changed", participant))

    def status_updated(self, message, level):
        self.events.append(("status_updated", (message, level)))

    def operation_failed(self, kind, message):
        self.events.append(("operation_failed", (kind, message)))

    def of(self, name):
        return [payload for event, payload in self.events if event == name]

    def clear(self):
        self.events.clear()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def rng():
    return FixedRandom([0.0])


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def recorder():
    return RecordingListener()


@pytest.fixture
def session(config, scheduler, rng, recorder):
    return SessionController(config, scheduler=scheduler, source=rng, listeners=[recorder])


@pytest.fixture
def make_rng():
    return FixedRandom


@pytest.fixture
def make_session(config, scheduler, recorder):
    def factory(values=(0.0,), **overrides):
        cfg = dataclasses.replace(config, **overrides)
        return SessionController(cfg, scheduler=scheduler, source=FixedRandom(values), listeners=[recorder])
    return factory
