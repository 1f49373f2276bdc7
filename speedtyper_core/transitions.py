"""Core typing-race state transitions (pure, no socket/HTTP).

This module implements the game logic of a single client in a two-player
typing race. All functions are deterministic and side-effect free: the clock is
passed in, and nothing here talks to the channel or the view.

Architecture:
- State is a frozen SessionState record (race text, cursor, scores, lifecycle)
- Every external stimulus has exactly one transition function:
    apply_event()      inbound channel events (practice/match/update/win/lose)
    apply_submission() a word submitted by the player
    apply_text()       a text resource response
- Each returns a Transition: the new state, the view notifications to emit (in
  order) and the outbound channel events to send (in order)
- TypingSession (session.py) owns the current state, applies transitions and
  performs the side effects

Lifecycle:
- Idle: after construction, before any practice/match event
- Practicing: practice received; scores keep counting, nothing is reported
- Matched: match received; scores/cursor reset, start time fresh
- GameOver: win or lose received; the channel decides the outcome, not us

Conflicting signals are forwarded as-is: win followed by lose emits both
notifications, and gameOver simply stays True. A new match clears gameOver.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple

from .events import InboundEvent, OutboundEvent, PrevResult, SessionEvent
from .race_text import LINE_LENGTH, RaceText
from .scoring import words_per_minute
from .types import ScorePayload
from .validation import parse_score_update, parse_text_response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    """Everything a session owns. Replace, never mutate."""

    text: RaceText = field(default_factory=RaceText)
    current_index: int = 0

    num_correct: int = 0
    num_missed: int = 0
    opp_score: int = 0
    wpm: float = 0.0

    practice_mode: bool = False
    game_over: bool = False
    start_time: Optional[float] = None

    input_word: Optional[str] = None
    prev_result: Optional[PrevResult] = None

    # Sequence number of the text response currently applied (0: none yet)
    text_seq: int = 0

    line_length: int = LINE_LENGTH

    @property
    def current_word(self) -> Optional[str]:
        return self.text.word_at(self.current_index)

    @property
    def current_line(self) -> Tuple[str, ...]:
        return self.text.current_line(self.current_index, self.line_length)

    @property
    def next_line(self) -> Tuple[str, ...]:
        return self.text.next_line(self.current_index, self.line_length)

    @property
    def phase(self) -> str:
        """'idle' | 'practicing' | 'matched' | 'game_over'"""
        if self.game_over:
            return "game_over"
        if self.start_time is None:
            return "idle"
        return "practicing" if self.practice_mode else "matched"


@dataclass(frozen=True)
class Transition:
    """Result of applying one stimulus to a SessionState."""

    state: SessionState
    notifications: Tuple[SessionEvent, ...] = ()
    outbound: Tuple[Tuple[OutboundEvent, ScorePayload], ...] = ()


def default_state(paragraph: str = "", line_length: int = LINE_LENGTH) -> SessionState:
    """Create a fresh session state.

    Args:
        paragraph: Text already known at construction time, if any
        line_length: Words per display line

    Returns:
        SessionState with all counters at zero, not practicing, not game over,
        no start time, cursor at the first word.
    """
    if line_length <= 0:
        raise ValueError(f"line_length must be positive, got {line_length}")
    return SessionState(text=RaceText.from_paragraph(paragraph), line_length=line_length)


def apply_event(
    state: SessionState,
    event: InboundEvent,
    payload: Any = None,
    *,
    now: float,
) -> Transition:
    """Apply an inbound channel event.

    Args:
        state: Current state (not mutated)
        event: One of InboundEvent
        payload: Event payload; only UPDATE carries one ({"score": int})
        now: Current time, epoch seconds

    Returns:
        Transition with the new state and notifications. Inbound events never
        produce outbound channel traffic.

    Raises:
        ValueError: if ``event`` is not an InboundEvent
    """
    if event is InboundEvent.PRACTICE:
        # Scores are deliberately kept: practice may resume after a partial match.
        new_state = replace(state, practice_mode=True, start_time=now)
        logger.debug(f"practice started at {now}")
        return Transition(state=new_state)

    if event is InboundEvent.MATCH:
        new_state = replace(
            state,
            practice_mode=False,
            game_over=False,
            num_correct=0,
            num_missed=0,
            wpm=0.0,
            current_index=0,
            start_time=now,
        )
        logger.debug(f"match started at {now}")
        return Transition(
            state=new_state,
            notifications=(SessionEvent.UPDATE, SessionEvent.BEGIN_GAME),
        )

    if event is InboundEvent.UPDATE:
        update = parse_score_update(payload)
        if update is None:
            return Transition(state=state)
        return Transition(state=replace(state, opp_score=update.score))

    if event is InboundEvent.WIN:
        if state.game_over:
            logger.warning("win received after game already over; forwarding")
        return Transition(
            state=replace(state, game_over=True),
            notifications=(SessionEvent.GAME_WIN,),
        )

    if event is InboundEvent.LOSE:
        if state.game_over:
            logger.warning("lose received after game already over; forwarding")
        return Transition(
            state=replace(state, game_over=True),
            notifications=(SessionEvent.GAME_LOSE,),
        )

    raise ValueError(f"Unknown inbound event: {event!r}")


def apply_submission(state: SessionState, input_word: str, *, now: float) -> Transition:
    """Score one submitted word and advance the cursor.

    The cursor always moves forward by exactly one word, correct or not; a
    missed word is never presented again. Past the end of the text there is no
    expected word, so every submission there counts as a miss.

    Only correct words outside practice mode are reported on the channel, with
    the new cumulative count.
    """
    expected = state.current_word
    notifications: list[SessionEvent] = []
    outbound: list[Tuple[OutboundEvent, ScorePayload]] = []

    if expected is not None and input_word == expected:
        num_correct = state.num_correct + 1
        num_missed = state.num_missed
        prev_result = PrevResult.CORRECT
        if not state.practice_mode:
            notifications.append(SessionEvent.CORRECT)
            outbound.append((OutboundEvent.UPDATE, {"score": num_correct}))
    else:
        num_correct = state.num_correct
        num_missed = state.num_missed + 1
        prev_result = PrevResult.INCORRECT

    wpm = words_per_minute(num_correct, state.start_time, now)
    new_state = replace(
        state,
        input_word=input_word,
        num_correct=num_correct,
        num_missed=num_missed,
        prev_result=prev_result,
        current_index=state.current_index + 1,
        wpm=wpm,
    )
    notifications.append(SessionEvent.UPDATE)

    if math.isnan(wpm):
        logger.debug("word submitted before practice/match; wpm undefined")

    return Transition(
        state=new_state,
        notifications=tuple(notifications),
        outbound=tuple(outbound),
    )


def apply_text(state: SessionState, payload: Any, *, seq: int) -> Transition:
    """Install a text resource response.

    Args:
        state: Current state
        payload: Decoded response body, expected {"text": str}
        seq: Sequence number of the request this response answers

    Returns:
        Transition emitting PARAGRAPH_SET, or an unchanged state when a newer
        response has already been applied.

    Behavior:
        - The text is replaced, never appended
        - The cursor is left where it is; MATCH is what rewinds it
        - A payload without usable text installs an empty text, so the
          session degrades to "no current word"
    """
    if seq <= state.text_seq:
        logger.warning(
            f"Discarding stale text response seq={seq} (applied seq={state.text_seq})"
        )
        return Transition(state=state)

    response = parse_text_response(payload)
    paragraph = response.text if response is not None else ""
    text = RaceText.from_paragraph(paragraph)
    logger.info(f"Race text set: {len(text)} words (seq={seq})")

    return Transition(
        state=replace(state, text=text, text_seq=seq),
        notifications=(SessionEvent.PARAGRAPH_SET,),
    )


def apply_tick(state: SessionState, *, now: float) -> Transition:
    """Recompute words-per-minute from the current count and clock."""
    wpm = words_per_minute(state.num_correct, state.start_time, now)
    return Transition(state=replace(state, wpm=wpm), notifications=(SessionEvent.UPDATE,))
