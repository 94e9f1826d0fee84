"""Error taxonomy for nazorun.

Catalog lookups raise NotFoundError / ForbiddenError, segment writes outside a
session's bounds raise InvalidRangeError. NoActiveSessionError exists for
callers that need a session; the lifecycle mutations themselves ignore a
missing session instead of raising it.
"""

from __future__ import annotations


class NazorunError(Exception):
    """Base class for all nazorun errors."""


class NotFoundError(NazorunError):
    """A referenced puzzle or question does not exist."""


class ForbiddenError(NazorunError):
    """The puzzle exists but is not currently playable."""


class InvalidRangeError(NazorunError):
    """A segment time write targeted an index outside the session."""


class NoActiveSessionError(NazorunError):
    """An operation required a live session and there is none."""
