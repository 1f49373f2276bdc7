"""Closed event vocabularies for the channel and the view layer."""
from __future__ import annotations

from enum import Enum


class InboundEvent(str, Enum):
    """Events the relay server delivers to this client."""

    PRACTICE = "practice"
    MATCH = "match"
    UPDATE = "update"  # payload: {"score": int}, opponent's correct-word count
    WIN = "win"
    LOSE = "lose"


class OutboundEvent(str, Enum):
    """Events this client sends to the relay server."""

    UPDATE = "update"  # payload: {"score": int}


class SessionEvent(str, Enum):
    """Notifications emitted to the view layer (no payload)."""

    UPDATE = "update"
    CORRECT = "correct"
    BEGIN_GAME = "beginGame"
    GAME_WIN = "gameWin"
    GAME_LOSE = "gameLose"
    PARAGRAPH_SET = "paragraphSet"


class PrevResult(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
