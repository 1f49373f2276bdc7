from __future__ import annotations

import pytest

from speedtyper_core import TypingSession


class FakeChannel:
    """In-memory channel: records outbound events, lets tests fire inbound ones."""

    def __init__(self, connects: bool = True):
        self.connects = connects
        self.opened = False
        self.closed = False
        self.handlers = {}
        self.sent = []

    def open(self):
        self.opened = True
        return self.connects

    def send(self, event, payload):
        self.sent.append((event, payload))

    def on_event(self, event, handler):
        self.handlers[event] = handler

    def close(self):
        self.closed = True

    def fire(self, event, payload=None):
        self.handlers[event](payload)


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeTextSource:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = 0

    def fetch(self):
        self.calls += 1
        return self.responses.pop(0)


@pytest.fixture()
def channel():
    return FakeChannel()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def make_session(channel, clock):
    def _make(paragraph="", text_source=None, **kwargs):
        return TypingSession(
            channel, text_source, paragraph=paragraph, clock=clock, **kwargs
        )

    return _make


@pytest.fixture()
def recorder():
    """Subscribe to session notifications and collect them in order."""

    class _Recorder:
        def __init__(self):
            self.events = []

        def attach(self, session):
            from speedtyper_core import SessionEvent

            for event in SessionEvent:
                session.on(event, lambda e=event: self.events.append(e))
            return self

    return _Recorder()
