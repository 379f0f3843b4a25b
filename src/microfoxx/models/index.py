"""
Index models.
"""

from pydantic import BaseModel, Field


class IndexParams(BaseModel):
    """Body of POST /index."""

    collection: str
    type: str
    fields: list[str] = Field(default_factory=list)
    sparse: bool = False
    unique: bool = False


class Index(BaseModel):
    id: str
    type: str = ""
    fields: list[str] = Field(default_factory=list)
    selectivity_estimate: float = Field(default=0, alias="selectivityEstimate")
    unique: bool = False
    sparse: bool = False

    model_config = {"populate_by_name": True}
