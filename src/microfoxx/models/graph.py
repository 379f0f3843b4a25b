"""
Graph definition models: body of POST /graph and /graph/<name>/relation.
"""

from pydantic import BaseModel, Field


class Relation(BaseModel):
    """Edge definition between n vertex collections and m vertex collections.

    e.g. has_bought from [company, customer] to [groceries, electronics].
    """

    name: str
    from_: list[str] = Field(default_factory=list, alias="from")
    to: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class Graph(BaseModel):
    name: str
    relations: list[Relation] = Field(default_factory=list)
    orphans: list[str] = Field(default_factory=list)  # vertex collections without relations
