"""Type definitions for channel payloads and session snapshots."""
from __future__ import annotations

from typing import List, Optional, TypedDict


class ScorePayload(TypedDict):
    """Payload of an ``update`` event, in either direction."""
    score: int


class TextPayload(TypedDict):
    """Body returned by the text resource."""
    text: str


class SessionSnapshot(TypedDict):
    """
    Read-only view of a session, keyed the way the view layer reads it.

    Produced by TypingSession.snapshot(); mutating it has no effect on the
    session.
    """
    # Race text
    paragraph: str
    paragraphArray: List[str]
    currentIndex: int
    currentLine: List[str]
    nextLine: List[str]

    # Scores
    numCorrect: int
    numMissed: int
    oppScore: int
    wpm: float

    # Lifecycle
    practiceMode: bool
    gameOver: bool
    startTime: Optional[float]  # epoch seconds, None until practice/match

    # Last submission
    inputWord: Optional[str]
    prevResult: Optional[str]  # 'correct' | 'incorrect'
