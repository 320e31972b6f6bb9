"""Suggestion Schemas — suggestion board payloads.

Invariants:
    - content is stripped and non-empty; author may be blank (stored as anonymous)
"""

from pydantic import BaseModel, Field, field_validator

from club_ledger.core.suggestions import Suggestion


class SuggestionCreate(BaseModel):
    content: str = Field(min_length=1, max_length=2000)
    author: str = Field("", max_length=100)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v

    @field_validator("author")
    @classmethod
    def strip_author(cls, v: str) -> str:
        return v.strip()


class SuggestionResponse(BaseModel):
    id: str
    content: str
    author: str
    created_at: str

    @classmethod
    def from_suggestion(cls, s: Suggestion) -> "SuggestionResponse":
        return cls(id=s.id, content=s.content, author=s.author, created_at=s.created_at)


class SuggestionListResponse(BaseModel):
    """Board after a write. applied is false when a delete lacked privilege."""
    applied: bool
    suggestions: list[SuggestionResponse]
