"""TypingSession: the stateful shell around the pure transitions.

One session per client. It owns the current SessionState, the channel and the
text source, and it is the only thing that mutates state:

- channel events arrive through dispatch() (one handler per InboundEvent is
  registered in initialize())
- the view calls submit_word() on each word boundary and fetch_text() to load
  a paragraph
- after each transition the session sends outbound channel events, then
  notifies observers registered with on()

Socket.IO delivers events on its own thread and text fetches may run in the
background, so every transition runs under one re-entrant lock. Observers are
called while the lock is held; they may read the session or call back into it.
"""
from __future__ import annotations

import logging
import threading
import time
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from .channel import Channel, SocketIOChannel
from .config import Config
from .events import InboundEvent, PrevResult, SessionEvent
from .race_text import LINE_LENGTH
from .text_source import HttpTextSource, TextSource
from .transitions import (
    SessionState,
    Transition,
    apply_event,
    apply_submission,
    apply_text,
    apply_tick,
    default_state,
)
from .types import SessionSnapshot

logger = logging.getLogger(__name__)

Observer = Callable[[], None]


class TypingSession:
    def __init__(
        self,
        channel: Channel,
        text_source: TextSource | None = None,
        *,
        paragraph: str = "",
        line_length: int = LINE_LENGTH,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._channel = channel
        self._text_source = text_source
        self._clock = clock
        self._lock = threading.RLock()
        self._observers: Dict[SessionEvent, List[Observer]] = {e: [] for e in SessionEvent}
        self._paragraph = paragraph
        self._line_length = line_length
        self._state = default_state(paragraph, line_length)
        self._fetch_seq = 0
        self._initialized = False
        self.initialize()

    @classmethod
    def from_config(cls, config: type[Config] = Config, **kwargs: Any) -> "TypingSession":
        """Session wired to a Socket.IO channel and the HTTP text resource."""
        channel = SocketIOChannel(config.SERVER_URL, namespace=config.SOCKET_NAMESPACE)
        text_source = HttpTextSource(
            config.SERVER_URL, config.TEXT_PATH, timeout=config.HTTP_TIMEOUT_SEC
        )
        kwargs.setdefault("line_length", config.LINE_LENGTH)
        return cls(channel, text_source, **kwargs)

    # ==================== LIFECYCLE ====================

    def initialize(self) -> None:
        """Reset to defaults, register channel handlers and open the channel.

        Runs once, from the constructor. Handlers are registered before the
        channel is opened so no early event is missed.
        """
        with self._lock:
            if self._initialized:
                logger.debug("initialize() called again; ignoring")
                return
            self._state = default_state(self._paragraph, self._line_length)
            for event in InboundEvent:
                self._channel.on_event(event, partial(self.dispatch, event))
            self._initialized = True

        if not self._channel.open():
            logger.warning("Channel not open; no match events will arrive")

    def close(self) -> None:
        self._channel.close()

    def dispatch(self, event: InboundEvent | str, payload: Any = None) -> None:
        """Apply one inbound channel event.

        Raises:
            ValueError: for an event name outside InboundEvent
        """
        event = InboundEvent(event)
        logger.debug(f"inbound {event.value} {payload!r}")
        with self._lock:
            self._commit(apply_event(self._state, event, payload, now=self._clock()))

    # ==================== PLAYER INPUT ====================

    def submit_word(self, input_word: str) -> None:
        """Score ``input_word`` against the current word and advance one word."""
        with self._lock:
            self._commit(apply_submission(self._state, input_word, now=self._clock()))

    def update_words_per_minute(self) -> float:
        """Recompute wpm against the clock (e.g. from a view timer) and emit update."""
        with self._lock:
            self._commit(apply_tick(self._state, now=self._clock()))
            return self._state.wpm

    # ==================== TEXT ====================

    def fetch_text(self, background: bool = False) -> Optional[threading.Thread]:
        """Load a fresh paragraph from the text source.

        With ``background=True`` the request runs on a daemon thread, which is
        returned. Responses are applied only if no newer one has been applied
        already.
        """
        if self._text_source is None:
            logger.warning("fetch_text() called without a text source")
            return None
        seq = self.begin_fetch()
        if not background:
            self._run_fetch(seq)
            return None
        thread = threading.Thread(target=self._run_fetch, args=(seq,), daemon=True)
        thread.start()
        return thread

    def begin_fetch(self) -> int:
        """Reserve a sequence number for a text request issued by the caller."""
        with self._lock:
            self._fetch_seq += 1
            return self._fetch_seq

    def complete_fetch(self, seq: int, payload: Any) -> None:
        """Apply the response to the request tagged ``seq``."""
        with self._lock:
            self._commit(apply_text(self._state, payload, seq=seq))

    def _run_fetch(self, seq: int) -> None:
        payload = self._text_source.fetch()
        if payload is None:
            logger.warning(f"Text request seq={seq} failed; keeping current text")
            return
        self.complete_fetch(seq, payload)

    # ==================== OBSERVERS ====================

    def on(self, event: SessionEvent, callback: Observer) -> None:
        with self._lock:
            self._observers[SessionEvent(event)].append(callback)

    def off(self, event: SessionEvent, callback: Observer) -> None:
        with self._lock:
            try:
                self._observers[SessionEvent(event)].remove(callback)
            except ValueError:
                pass

    def _emit(self, event: SessionEvent) -> None:
        for callback in list(self._observers[event]):
            callback()

    def _commit(self, transition: Transition) -> None:
        self._state = transition.state
        for event, payload in transition.outbound:
            self._channel.send(event, payload)
        for notification in transition.notifications:
            self._emit(notification)

    # ==================== READ ACCESS ====================

    @property
    def state(self) -> SessionState:
        return self._state

    def current_word(self) -> Optional[str]:
        return self._state.current_word

    def current_line(self) -> List[str]:
        return list(self._state.current_line)

    def next_line(self) -> List[str]:
        return list(self._state.next_line)

    @property
    def paragraph(self) -> str:
        return self._state.text.paragraph

    @property
    def paragraph_array(self) -> List[str]:
        return list(self._state.text.words)

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def num_correct(self) -> int:
        return self._state.num_correct

    @property
    def num_missed(self) -> int:
        return self._state.num_missed

    @property
    def opp_score(self) -> int:
        return self._state.opp_score

    @property
    def wpm(self) -> float:
        return self._state.wpm

    @property
    def practice_mode(self) -> bool:
        return self._state.practice_mode

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    @property
    def start_time(self) -> Optional[float]:
        return self._state.start_time

    @property
    def input_word(self) -> Optional[str]:
        return self._state.input_word

    @property
    def prev_result(self) -> Optional[PrevResult]:
        return self._state.prev_result

    @property
    def phase(self) -> str:
        return self._state.phase

    def snapshot(self) -> SessionSnapshot:
        s = self._state
        return {
            "paragraph": s.text.paragraph,
            "paragraphArray": list(s.text.words),
            "currentIndex": s.current_index,
            "currentLine": list(s.current_line),
            "nextLine": list(s.next_line),
            "numCorrect": s.num_correct,
            "numMissed": s.num_missed,
            "oppScore": s.opp_score,
            "wpm": s.wpm,
            "practiceMode": s.practice_mode,
            "gameOver": s.game_over,
            "startTime": s.start_time,
            "inputWord": s.input_word,
            "prevResult": s.prev_result.value if s.prev_result is not None else None,
        }
