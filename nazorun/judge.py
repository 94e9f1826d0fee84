"""Answer judge: decides whether a free-text submission is correct.

Both sides are trimmed and case-folded, then compared exactly against the
primary answer and each alternative in order. No fuzzy or partial matching.
The judge never touches session state; callers pass the verdict on to
SessionManager.submit_answer().
"""

from __future__ import annotations

from typing import Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from nazorun.catalog import Question


def normalize(text: str) -> str:
    return text.strip().casefold()


def matched_answer(text: str, primary: str, alternatives: Iterable[str] = ()) -> Optional[str]:
    """Return the accepted answer that `text` matches, or None.

    The primary answer is checked first, then alternatives in order; the
    first match wins.
    """
    candidate = normalize(text)
    for accepted in (primary, *alternatives):
        if candidate == normalize(accepted):
            return accepted
    return None


def judge(text: str, primary: str, alternatives: Iterable[str] = ()) -> bool:
    """True iff `text` matches the primary or any alternative answer."""
    return matched_answer(text, primary, alternatives) is not None


def judge_question(text: str, question: Question) -> bool:
    """Judge a submission against a catalog question."""
    return judge(text, question.correct_answer, question.alternative_answers)
