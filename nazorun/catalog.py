"""Puzzle catalog: discovery, lookup and listing.

Each puzzle is a subpackage of nazorun/puzzles/ whose __init__.py defines:
    ID, TITLE, DESCRIPTION, THUMBNAIL, IS_ACTIVE, CREATED_BY, CREATED_AT
    QUESTIONS  list of dicts with order, image, format, answer, alternatives

The catalog is read-only: get_puzzle() raises NotFoundError for unknown ids
and ForbiddenError for inactive puzzles.
"""

from __future__ import annotations

import importlib
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from nazorun.errors import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

_PUZZLES_PACKAGE = "nazorun.puzzles"


@dataclass
class Question:
    """One image question with its accepted answers."""

    order: int
    image_ref: str
    answer_format: list[str]
    correct_answer: str
    alternative_answers: list[str] = field(default_factory=list)


@dataclass
class Puzzle:
    """A puzzle and its ordered questions."""

    id: str
    title: str
    description: str
    thumbnail_ref: str
    is_active: bool
    created_by: str
    created_at: str
    questions: list[Question] = field(default_factory=list)
    slug: str = ""

    @property
    def total_questions(self) -> int:
        return len(self.questions)


@dataclass
class PuzzlePage:
    """One page of list_puzzles() results."""

    items: list[Puzzle]
    total_count: int
    current_page: int
    total_pages: int
    has_next: bool
    has_previous: bool


def _puzzles_root() -> Path:
    """Absolute path to the puzzles/ directory."""
    return Path(__file__).parent / "puzzles"


def _question_from_dict(d: dict) -> Question:
    return Question(
        order=int(d["order"]),
        image_ref=d.get("image", ""),
        answer_format=list(d.get("format", [])),
        correct_answer=d["answer"],
        alternative_answers=list(d.get("alternatives", [])),
    )


def load_puzzle_package(slug: str) -> Optional[Puzzle]:
    """Load a single puzzle package by directory name.

    Returns None if the package is missing or malformed.
    """
    puzzle_dir = _puzzles_root() / slug
    if not (puzzle_dir / "__init__.py").exists():
        return None

    try:
        mod = importlib.import_module(f"{_PUZZLES_PACKAGE}.{slug}")
    except ImportError:
        logger.warning("Could not import puzzle package %s", slug)
        return None

    try:
        questions = sorted(
            (_question_from_dict(q) for q in getattr(mod, "QUESTIONS", [])),
            key=lambda q: q.order,
        )
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Skipping malformed puzzle %s: %s", slug, e)
        return None

    return Puzzle(
        id=str(getattr(mod, "ID", slug)),
        title=getattr(mod, "TITLE", slug),
        description=getattr(mod, "DESCRIPTION", ""),
        thumbnail_ref=getattr(mod, "THUMBNAIL", ""),
        is_active=bool(getattr(mod, "IS_ACTIVE", True)),
        created_by=getattr(mod, "CREATED_BY", ""),
        created_at=getattr(mod, "CREATED_AT", ""),
        questions=questions,
        slug=slug,
    )


def load_catalog() -> list[Puzzle]:
    """Discover every puzzle package, active or not."""
    root = _puzzles_root()
    puzzles = []
    for child in sorted(root.iterdir()):
        if not child.is_dir() or child.name.startswith("_"):
            continue
        puzzle = load_puzzle_package(child.name)
        if puzzle:
            puzzles.append(puzzle)
    return puzzles


def get_puzzle(puzzle_id: str) -> Puzzle:
    """Look up a playable puzzle by id (or package slug)."""
    for puzzle in load_catalog():
        if puzzle.id == puzzle_id or puzzle.slug == puzzle_id:
            if not puzzle.is_active:
                raise ForbiddenError(f"Puzzle {puzzle_id} is not currently available")
            return puzzle
    raise NotFoundError(f"Unknown puzzle: {puzzle_id}")


def get_question(puzzle: Puzzle, index: int) -> Question:
    """Question at a 0-based index (order index + 1)."""
    for question in puzzle.questions:
        if question.order == index + 1:
            return question
    raise NotFoundError(f"Puzzle {puzzle.id} has no question #{index + 1}")


def list_puzzles(search: str = "", page: int = 1, limit: int = 10) -> PuzzlePage:
    """Active puzzles matching `search`, newest first, one page at a time."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    needle = search.lower()
    matches = [
        p for p in load_catalog()
        if p.is_active and (needle in p.title.lower() or needle in p.description.lower())
    ]
    # ISO8601 timestamps sort lexicographically
    matches.sort(key=lambda p: p.created_at, reverse=True)

    start = (page - 1) * limit
    end = start + limit
    return PuzzlePage(
        items=matches[start:end],
        total_count=len(matches),
        current_page=page,
        total_pages=math.ceil(len(matches) / limit),
        has_next=end < len(matches),
        has_previous=page > 1,
    )
