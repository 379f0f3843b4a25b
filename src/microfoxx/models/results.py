"""
Operation results: the uniform success/fault envelope every call returns.

status_code is 0 when the fault happened before a response arrived.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from microfoxx.errors import ErrorKind, MicroFoxxError
from microfoxx.models.index import Index
from microfoxx.models.payload import JsonPayload


class OperationResult(BaseModel):
    status_code: int = 0
    message: Optional[str] = None
    error: Optional[MicroFoxxError] = None

    model_config = {"arbitrary_types_allowed": True}

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None


class CursorState(str, Enum):
    COMPLETED = "completed"  # single response, no cursor created
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


class CursorQueryResult(OperationResult):
    documents: Optional[JsonPayload] = None
    cursor: Optional[str] = None
    has_more: bool = False
    count: Optional[int] = None

    @property
    def state(self) -> Optional[CursorState]:
        if not self.ok:
            return None
        if self.cursor is None:
            return CursorState.COMPLETED
        return CursorState.ACTIVE if self.has_more else CursorState.EXHAUSTED


class CreationResult(OperationResult):
    created_ids: list[str] = Field(default_factory=list)


class DocumentOpResult(OperationResult):
    document: Optional[JsonPayload] = None
    event: Optional[JsonPayload] = None


class DocumentsOpResult(OperationResult):
    documents: Optional[JsonPayload] = None
    events: Optional[JsonPayload] = None


class DocumentsResult(OperationResult):
    documents: Optional[JsonPayload] = None


class DocumentResult(OperationResult):
    document: Optional[JsonPayload] = None


class DocumentCountResult(OperationResult):
    count: int = -1


class IndexListResult(OperationResult):
    indexes: list[Index] = Field(default_factory=list)


class IndexOpResult(OperationResult):
    pass
