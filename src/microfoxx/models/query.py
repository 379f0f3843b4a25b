"""
Query parameter models for cursor queries and modifying queries.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class CursorQueryParams(BaseModel):
    """Body of POST /cursor.

    A batch size of 0 (or none) asks the server for everything in one
    response, so no cursor is created.
    """

    query: str
    bind_vars: dict[str, Any] = Field(default_factory=dict, alias="bindVars")
    batch_size: Optional[int] = Field(default=None, ge=0, alias="batchSize")
    count: bool = False

    model_config = {"populate_by_name": True}

    def to_body(self) -> dict[str, Any]:
        body = self.model_dump(by_alias=True, exclude_none=True)
        if not self.batch_size:
            body.pop("batchSize", None)
        return body


class ModifyingQueryParams(BaseModel):
    """Body of POST /insert, /update and /remove."""

    write_collection: str = Field(alias="writeCollection")
    read_collections: list[str] = Field(default_factory=list, alias="readCollections")
    query: str
    bind_vars: dict[str, Any] = Field(default_factory=dict, alias="bindVars")

    model_config = {"populate_by_name": True}

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
