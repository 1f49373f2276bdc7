from .events import InboundEvent, OutboundEvent, PrevResult, SessionEvent
from .race_text import LINE_LENGTH, RaceText, split_words
from .scoring import words_per_minute
from .transitions import (
    SessionState,
    Transition,
    apply_event,
    apply_submission,
    apply_text,
    apply_tick,
    default_state,
)
from .types import ScorePayload, SessionSnapshot, TextPayload
from .validation import InputSanitizer, ScoreUpdate, TextResponse
from .channel import Channel, SocketIOChannel
from .text_source import HttpTextSource, TextSource
from .config import Config
from .session import TypingSession

__all__ = [
    "InboundEvent",
    "OutboundEvent",
    "PrevResult",
    "SessionEvent",
    "LINE_LENGTH",
    "RaceText",
    "split_words",
    "words_per_minute",
    "SessionState",
    "Transition",
    "apply_event",
    "apply_submission",
    "apply_text",
    "apply_tick",
    "default_state",
    "ScorePayload",
    "SessionSnapshot",
    "TextPayload",
    "InputSanitizer",
    "ScoreUpdate",
    "TextResponse",
    "Channel",
    "SocketIOChannel",
    "HttpTextSource",
    "TextSource",
    "Config",
    "TypingSession",
]
