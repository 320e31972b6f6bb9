"""Suggestion board rules — newest first, anonymous fallback, removal."""

import pytest

from club_ledger.core.errors import ResourceNotFoundError
from club_ledger.core.suggestions import (
    ANONYMOUS_AUTHOR, Suggestion, add_suggestion, remove_suggestion,
)

FIRST = Suggestion("s1", "Snacks please", "Bob", "2026-03-01T18:30:00")
SECOND = Suggestion("s2", "More chess nights", "Dana", "2026-03-02T19:00:00")


def test_new_suggestions_go_first():
    board = add_suggestion(add_suggestion((), FIRST), SECOND)
    assert [s.id for s in board] == ["s2", "s1"]


def test_blank_author_becomes_anonymous():
    board = add_suggestion((), Suggestion("s3", "Quiet room", "  ", "2026-03-03T10:00:00"))
    assert board[0].author == ANONYMOUS_AUTHOR


def test_remove_keeps_the_rest_in_order():
    board = (SECOND, FIRST)
    assert remove_suggestion(board, "s2") == (FIRST,)


def test_remove_unknown_raises():
    with pytest.raises(ResourceNotFoundError):
        remove_suggestion((FIRST,), "missing")
