"""Race text: the word sequence both players type, and its display windows.

The paragraph delivered by the server is split on whitespace once, when it is
set. Display windows are plain slices relative to the cursor:

- current line: words [cursor, cursor + line_length)
- next line:    words [cursor + line_length, cursor + 2 * line_length)

Slices past the end are simply shorter (or empty); nothing here raises for an
out-of-range cursor.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

LINE_LENGTH = 5


def split_words(paragraph: str | None) -> Tuple[str, ...]:
    """Split a paragraph into words; runs of whitespace never yield empty words."""
    if not paragraph:
        return ()
    return tuple(paragraph.split())


@dataclass(frozen=True)
class RaceText:
    paragraph: str = ""
    words: Tuple[str, ...] = ()

    @classmethod
    def from_paragraph(cls, paragraph: str | None) -> "RaceText":
        paragraph = paragraph or ""
        return cls(paragraph=paragraph, words=split_words(paragraph))

    def __len__(self) -> int:
        return len(self.words)

    def word_at(self, index: int) -> Optional[str]:
        """Word at ``index``, or None when the index is past the end."""
        if index < 0 or index >= len(self.words):
            return None
        return self.words[index]

    def line_at(self, index: int, line_length: int = LINE_LENGTH) -> Tuple[str, ...]:
        start = max(index, 0)
        return self.words[start : start + line_length]

    def current_line(self, cursor: int, line_length: int = LINE_LENGTH) -> Tuple[str, ...]:
        return self.line_at(cursor, line_length)

    def next_line(self, cursor: int, line_length: int = LINE_LENGTH) -> Tuple[str, ...]:
        return self.line_at(cursor + line_length, line_length)
