"""Suggestion Service — the club suggestion board.

Invariants:
    - Anyone may post; deleting requires privilege, and an unprivileged
      delete returns the current board with applied=False
    - Only the suggestions record is ever written
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime

from club_ledger.core.domain_types import RecordKey
from club_ledger.core.ledger_snapshot import ClubState, encode_record
from club_ledger.core.repository_protocols import LedgerStore
from club_ledger.core.suggestions import Suggestion, add_suggestion, remove_suggestion
from club_ledger.schemas.suggestion import (
    SuggestionCreate, SuggestionListResponse, SuggestionResponse,
)

logger = logging.getLogger(__name__)


def _board(state: ClubState, applied: bool) -> SuggestionListResponse:
    return SuggestionListResponse(
        applied=applied,
        suggestions=[SuggestionResponse.from_suggestion(s) for s in state.suggestions],
    )


class SuggestionService:
    def __init__(self, store: LedgerStore):
        self._store = store

    async def list_suggestions(self) -> SuggestionListResponse:
        return _board(await self._store.load_state(), applied=True)

    async def add(self, body: SuggestionCreate) -> SuggestionListResponse:
        state = await self._store.load_state()
        suggestion = Suggestion(
            id=str(uuid.uuid4()),
            content=body.content,
            author=body.author,
            created_at=datetime.now().isoformat(timespec="seconds"),
        )
        new_state = replace(state, suggestions=add_suggestion(state.suggestions, suggestion))
        await self._write(new_state)
        logger.info(f"Suggestion added: {suggestion.id}", extra={"applied": True})
        return _board(new_state, applied=True)

    async def delete(self, suggestion_id: str, *, privileged: bool) -> SuggestionListResponse:
        state = await self._store.load_state()
        if not privileged:
            logger.warning(
                f"Suggestion delete rejected: {suggestion_id}", extra={"applied": False},
            )
            return _board(state, applied=False)
        new_state = replace(
            state, suggestions=remove_suggestion(state.suggestions, suggestion_id),
        )
        await self._write(new_state)
        logger.info(f"Suggestion deleted: {suggestion_id}", extra={"applied": True})
        return _board(new_state, applied=True)

    async def _write(self, state: ClubState) -> None:
        await self._store.replace_records(
            {RecordKey.SUGGESTIONS: encode_record(state, RecordKey.SUGGESTIONS)},
        )
