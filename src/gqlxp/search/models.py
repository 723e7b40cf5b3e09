"""Records written to and read from the schema search index."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from pydantic import BaseModel, Field


@dataclass
class SearchDocument:
    """One searchable entity extracted from a schema."""

    kind: str  # Object, Field, Enum, ...
    name: str
    description: str
    path: str  # "Type.field", bare type name, or "@directive"
    schema_id: str

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


class SearchResult(BaseModel):
    kind: str = Field(..., description="Kind of result (Object, Field, Enum, ...)")
    name: str = Field(..., description="Type or field name")
    path: str = Field(..., description="Locator such as 'Query.user' or '@deprecated'")
    description: str = Field("", description="Description text")
    score: float = Field(..., description="Relevance score (higher is better)")
