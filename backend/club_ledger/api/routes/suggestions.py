"""Suggestion Routes — open posting, privileged delete."""

from fastapi import APIRouter, Depends

from club_ledger.api.dependencies import get_store, is_privileged
from club_ledger.infrastructure.ledger_store import SqlLedgerStore
from club_ledger.schemas.suggestion import SuggestionCreate, SuggestionListResponse
from club_ledger.services.suggestion_service import SuggestionService

router = APIRouter(prefix="/api/v1/suggestions", tags=["suggestions"])


@router.get("", response_model=SuggestionListResponse)
async def list_suggestions(store: SqlLedgerStore = Depends(get_store)):
    return await SuggestionService(store).list_suggestions()


@router.post("", response_model=SuggestionListResponse)
async def add_suggestion(
    body: SuggestionCreate, store: SqlLedgerStore = Depends(get_store),
):
    return await SuggestionService(store).add(body)


@router.delete("/{suggestion_id}", response_model=SuggestionListResponse)
async def delete_suggestion(
    suggestion_id: str,
    store: SqlLedgerStore = Depends(get_store),
    privileged: bool = Depends(is_privileged),
):
    return await SuggestionService(store).delete(suggestion_id, privileged=privileged)
