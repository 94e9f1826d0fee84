"""Answer-format validation: the "can this be submitted yet" gate.

Questions declare one or more format tags. A single constrained tag
(number, hiragana, katakana, English) restricts the character class of the
submission; anything else only requires non-blank input. Failing validation
is never an error, the caller just refuses to submit.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Sequence


class AnswerFormat(str, Enum):
    """Answer format tags as they appear in the catalog."""

    NUMBER = "数字"
    HIRAGANA = "ひらがな"
    KATAKANA = "カタカナ"
    ENGLISH = "英語"
    KANJI = "漢字"
    TEXT = "文字列"


# Only these tags constrain the character class when used alone.
_PATTERNS: dict[AnswerFormat, re.Pattern[str]] = {
    AnswerFormat.NUMBER: re.compile(r"^[0-9]+$"),
    AnswerFormat.HIRAGANA: re.compile(r"^[ぁ-んー\s]+$"),
    AnswerFormat.KATAKANA: re.compile(r"^[ァ-ンー\s]+$"),
    AnswerFormat.ENGLISH: re.compile(r"^[a-zA-Z\s]+$"),
}

_MESSAGES: dict[AnswerFormat, str] = {
    AnswerFormat.NUMBER: "Digits only (0-9)",
    AnswerFormat.HIRAGANA: "Hiragana only",
    AnswerFormat.KATAKANA: "Katakana only",
    AnswerFormat.ENGLISH: "English letters only",
}

_PLACEHOLDERS: dict[AnswerFormat, str] = {
    AnswerFormat.NUMBER: "e.g. 42",
    AnswerFormat.HIRAGANA: "e.g. なぞとき",
    AnswerFormat.KATAKANA: "e.g. ナゾトキ",
    AnswerFormat.ENGLISH: "e.g. puzzle",
    AnswerFormat.KANJI: "e.g. 謎解",
    AnswerFormat.TEXT: "e.g. your answer",
}

_DEFAULT_PLACEHOLDER = "Type your answer"


def parse_format(tag: str) -> Optional[AnswerFormat]:
    """Map a catalog tag to an AnswerFormat, None for unknown tags."""
    try:
        return AnswerFormat(tag)
    except ValueError:
        return None


def _single_format(formats: Sequence[str]) -> Optional[AnswerFormat]:
    if len(formats) != 1:
        return None
    return parse_format(formats[0])


def is_submittable(text: str, formats: Sequence[str]) -> bool:
    """Whether `text` may be submitted for a question with these tags."""
    value = text.strip()
    if not value:
        return False
    fmt = _single_format(formats)
    pattern = _PATTERNS.get(fmt) if fmt else None
    if pattern is None:
        return True
    return bool(pattern.match(value))


def validation_message(formats: Sequence[str]) -> str:
    """What to tell the user when is_submittable() is False."""
    fmt = _single_format(formats)
    if fmt in _MESSAGES:
        return _MESSAGES[fmt]
    return "Answer must not be empty"


def placeholder(formats: Sequence[str]) -> str:
    fmt = _single_format(formats)
    if fmt is None:
        return _DEFAULT_PLACEHOLDER
    return _PLACEHOLDERS.get(fmt, _DEFAULT_PLACEHOLDER)
