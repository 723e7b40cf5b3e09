"""Facade combining schema indexing and searching."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from gqlxp.gql.types import GraphQLSchema

from .indexer import SchemaIndexer
from .models import SearchResult
from .searcher import IndexUnavailableError, SchemaSearcher

logger = logging.getLogger(__name__)


class SchemaSearchEngine:
    """Index and search schemas stored under one base directory.

    The caller decides where indexes live; schema IDs namespace them.
    """

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)
        self.indexer = SchemaIndexer(self.base_dir)
        self.searcher = SchemaSearcher(self.base_dir)

    def index(self, schema_id: str, schema: GraphQLSchema) -> int:
        return self.indexer.index(schema_id, schema)

    def remove(self, schema_id: str) -> None:
        self.indexer.remove(schema_id)

    def exists(self, schema_id: str) -> bool:
        return self.indexer.exists(schema_id)

    def document_count(self, schema_id: str) -> Optional[int]:
        return self.indexer.document_count(schema_id)

    def search(self, schema_id: str, query: str, limit: int = 30) -> List[SearchResult]:
        return self.searcher.search(schema_id, query, limit)

    def search_or_index(
        self, schema_id: str, schema: GraphQLSchema, query: str, limit: int = 30
    ) -> List[SearchResult]:
        """Search, building the index first when missing and retrying once."""
        if not self.exists(schema_id):
            logger.info("Indexing schema before first search", extra={"schema_id": schema_id})
            self.index(schema_id, schema)
        try:
            return self.search(schema_id, query, limit)
        except IndexUnavailableError:
            logger.warning("Search index unavailable, rebuilding", extra={"schema_id": schema_id})
            self.index(schema_id, schema)
            return self.search(schema_id, query, limit)
