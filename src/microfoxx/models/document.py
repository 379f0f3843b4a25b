"""
Document retrieval parameters: GET /<collection> and /<collection>/count.
"""

from typing import Optional

from pydantic import BaseModel, Field

SORT_ASC = "ASC"
SORT_DESC = "DESC"


class DocumentRetrievalParams(BaseModel):
    fields: dict[str, str] = Field(default_factory=dict)  # filter: field == value
    sort_fields: list[str] = Field(default_factory=list)
    sort_order: Optional[str] = None
    limit_offset: int = Field(default=0, ge=0)
    limit_count: int = Field(default=0, ge=0)

    def to_query_params(self, *, filters_only: bool = False) -> list[tuple[str, str]]:
        """Query string pairs. Counting only needs the field filters."""
        params = list(self.fields.items())
        if filters_only:
            return params
        if self.sort_fields:
            sort = ",".join(self.sort_fields)
            if self.sort_order:
                sort += f"::{self.sort_order}"
            params.append(("sort", sort))
        if self.limit_count > 0:
            params.append(("limit", f"{self.limit_offset},{self.limit_count}"))
        return params
