"""
Input validation schemas using Pydantic v2
Validates channel payloads and the text resource body
"""

import logging
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

MAX_PARAGRAPH_LENGTH = 20000

# ==================== SCHEMAS ====================


class ScoreUpdate(BaseModel):
    """Opponent score carried by an inbound ``update`` event"""

    score: int = Field(
        ..., ge=0, description="Cumulative correct-word count"
    )

    @field_validator("score", mode="before")
    @classmethod
    def reject_bool(cls, v: Any) -> Any:
        """bool is an int subclass; a true/false score is a malformed payload"""
        if isinstance(v, bool):
            raise ValueError("score must be a number, got bool")
        return v

    model_config = ConfigDict(extra="ignore")


class TextResponse(BaseModel):
    """Body of the text resource response"""

    text: str = Field(..., max_length=MAX_PARAGRAPH_LENGTH, description="Race paragraph")

    @field_validator("text")
    @classmethod
    def sanitize_text(cls, v: str) -> str:
        """Strip control characters the view cannot render"""
        return InputSanitizer.sanitize_paragraph(v)

    model_config = ConfigDict(extra="ignore")


class InputSanitizer:
    """Utility class for input sanitization"""

    @staticmethod
    def sanitize_paragraph(value: str) -> str:
        """Remove null bytes and non-whitespace control characters"""
        if not isinstance(value, str):
            return str(value)

        value = value.replace("\0", "")
        # Keep \t \n \r: they still separate words
        value = re.sub(r"[\x01-\x08\x0b\x0c\x0e-\x1f\x7f]", "", value)
        return value.strip()


# ==================== PARSERS ====================


def parse_score_update(payload: Any) -> Optional[ScoreUpdate]:
    """
    Validate an inbound ``update`` payload.

    Returns:
        ScoreUpdate, or None if the payload is malformed (logged, not raised)
    """
    if not isinstance(payload, dict):
        logger.warning(f"Ignoring score update with non-object payload: {payload!r}")
        return None
    try:
        return ScoreUpdate.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid score update {payload!r}: {e}")
        return None


def parse_text_response(payload: Any) -> Optional[TextResponse]:
    """
    Validate the text resource body.

    Returns:
        TextResponse, or None if the body has no usable text (logged, not raised)
    """
    if not isinstance(payload, dict):
        logger.warning(f"Text response is not an object: {payload!r}")
        return None
    try:
        return TextResponse.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Text response failed validation: {e}")
        return None


# ==================== EXPORT ====================

__all__ = [
    "ScoreUpdate",
    "TextResponse",
    "InputSanitizer",
    "parse_score_update",
    "parse_text_response",
]
