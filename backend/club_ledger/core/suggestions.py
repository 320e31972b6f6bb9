"""Suggestion Board — member-submitted notes, newest first.

Invariants:
    - New suggestions are prepended, so the stored tuple is newest first
    - A blank author becomes ANONYMOUS_AUTHOR
    - Removing an unknown id raises ResourceNotFoundError
"""

from dataclasses import dataclass
from typing import Sequence

from club_ledger.core.errors import ResourceNotFoundError

ANONYMOUS_AUTHOR = "Anonymous"


@dataclass(frozen=True)
class Suggestion:
    id: str
    content: str
    author: str
    created_at: str


def add_suggestion(
    suggestions: Sequence[Suggestion], suggestion: Suggestion,
) -> tuple[Suggestion, ...]:
    if not suggestion.author.strip():
        suggestion = Suggestion(
            suggestion.id, suggestion.content, ANONYMOUS_AUTHOR, suggestion.created_at,
        )
    return (suggestion, *suggestions)


def remove_suggestion(
    suggestions: Sequence[Suggestion], suggestion_id: str,
) -> tuple[Suggestion, ...]:
    if not any(s.id == suggestion_id for s in suggestions):
        raise ResourceNotFoundError("Suggestion", suggestion_id)
    return tuple(s for s in suggestions if s.id != suggestion_id)
