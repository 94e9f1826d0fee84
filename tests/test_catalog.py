"""Puzzle catalog: discovery, lookup, listing."""

import pytest

from nazorun.catalog import get_puzzle, get_question, list_puzzles, load_catalog
from nazorun.errors import ForbiddenError, NotFoundError


def test_catalog_discovers_bundled_puzzles():
    ids = {p.id for p in load_catalog()}
    assert {"1", "2", "3", "4", "5"} <= ids


def test_get_puzzle_by_id():
    puzzle = get_puzzle("1")
    assert puzzle.title == "数字の謎"
    assert puzzle.total_questions == 3
    assert [q.order for q in puzzle.questions] == [1, 2, 3]


def test_get_puzzle_by_slug():
    assert get_puzzle("numbers").id == "1"


def test_get_puzzle_unknown():
    with pytest.raises(NotFoundError):
        get_puzzle("does-not-exist")


def test_get_puzzle_inactive():
    with pytest.raises(ForbiddenError):
        get_puzzle("5")


def test_get_question():
    puzzle = get_puzzle("1")
    q = get_question(puzzle, 1)
    assert q.order == 2
    assert q.correct_answer == "256"
    assert q.alternative_answers == ["二百五十六"]
    assert q.answer_format == ["数字"]


def test_get_question_out_of_range():
    puzzle = get_puzzle("1")
    with pytest.raises(NotFoundError):
        get_question(puzzle, 3)


# --- listing ---

def test_list_excludes_inactive_and_sorts_newest_first():
    page = list_puzzles()
    ids = [p.id for p in page.items]
    assert "5" not in ids
    created = [p.created_at for p in page.items]
    assert created == sorted(created, reverse=True)
    assert page.total_count == len(ids)


def test_list_search_is_case_insensitive():
    page = list_puzzles(search="暗号")
    assert [p.id for p in page.items] == ["2"]


def test_list_search_matches_description():
    page = list_puzzles(search="空間認識")
    assert [p.id for p in page.items] == ["3"]


def test_list_pagination():
    first = list_puzzles(page=1, limit=2)
    second = list_puzzles(page=2, limit=2)
    assert len(first.items) == 2
    assert first.has_next
    assert not first.has_previous
    assert second.has_previous
    assert first.total_pages == second.total_pages
    assert not {p.id for p in first.items} & {p.id for p in second.items}


def test_list_page_past_end_is_empty():
    page = list_puzzles(page=99, limit=10)
    assert page.items == []
    assert not page.has_next


@pytest.mark.parametrize("page, limit", [(0, 10), (1, 0)])
def test_list_rejects_bad_paging(page, limit):
    with pytest.raises(ValueError):
        list_puzzles(page=page, limit=limit)
