"""Full-text search over schema types, fields and directives."""

from .engine import SchemaSearchEngine
from .indexer import SchemaIndexer, extract_documents
from .models import SearchDocument, SearchResult
from .searcher import (
    FIELD_BOOSTS,
    IndexUnavailableError,
    SchemaSearcher,
    SearchError,
    SearchQueryError,
    prepare_match_query,
)

__all__ = [
    "FIELD_BOOSTS",
    "IndexUnavailableError",
    "SchemaIndexer",
    "SchemaSearchEngine",
    "SchemaSearcher",
    "SearchDocument",
    "SearchError",
    "SearchQueryError",
    "SearchResult",
    "extract_documents",
    "prepare_match_query",
]
