"""Query per-schema full-text indexes with per-field boosts."""

from __future__ import annotations

import logging
from pathlib import Path
import re
from typing import Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from .database import DOCUMENT_COLUMNS, IndexDatabase
from .models import SearchResult

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[0-9A-Za-z]+(?:\*)?")

# Name matches rank highest, description-only matches lowest.
FIELD_BOOSTS: Dict[str, float] = {
    "name": 2.0,
    "kind": 1.5,
    "path": 1.5,
    "description": 1.0,
}


class SearchError(Exception):
    """Base exception for search index failures."""

    def __init__(self, message: str, schema_id: Optional[str] = None):
        self.schema_id = schema_id
        super().__init__(message)


class IndexUnavailableError(SearchError):
    """Raised when searching a schema that has no index yet."""
    pass


class SearchQueryError(SearchError, ValueError):
    """Raised when a query has nothing searchable in it."""
    pass


def bm25_weights() -> str:
    """FTS5 bm25() column weights in table column order; unindexed columns get 0."""
    return ", ".join(str(FIELD_BOOSTS.get(column, 0.0)) for column in DOCUMENT_COLUMNS)


def prepare_match_query(query: str) -> str:
    """
    Sanitize user-supplied query text for FTS5 MATCH usage.

    - Extracts tokens comprised of alphanumeric characters.
    - Preserves a single trailing '*' to allow prefix searches.
    - Wraps each token in double quotes to neutralize MATCH operators.
    - Joins tokens with OR so a hit on any term in any column qualifies.
    """
    sanitized_terms: List[str] = []

    for match in TOKEN_PATTERN.finditer(query or ""):
        token = match.group()
        has_prefix_star = token.endswith("*")
        core = token[:-1] if has_prefix_star else token
        if not core:
            continue
        sanitized_terms.append(f'"{core}"{"*" if has_prefix_star else ""}')

    if not sanitized_terms:
        raise SearchQueryError("Search query must contain alphanumeric characters")

    return " OR ".join(sanitized_terms)


class SchemaSearcher:
    """Run ranked searches against indexes created by ``SchemaIndexer``."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def search(self, schema_id: str, query: str, limit: int = 30) -> List[SearchResult]:
        """Return matches ordered by descending score.

        Raises:
            IndexUnavailableError: If no index exists for ``schema_id``.
            SearchQueryError: If the query has no searchable terms.
        """
        if limit < 1:
            raise ValueError("Search limit must be at least 1")
        match_query = prepare_match_query(query)

        database = IndexDatabase(self.base_dir, schema_id)
        if not database.exists():
            raise IndexUnavailableError(f"No search index for schema {schema_id!r}", schema_id)

        statement = text(
            f"""
            SELECT kind, name, path, description,
                   -bm25(schema_fts, {bm25_weights()}) AS score
            FROM schema_fts
            WHERE schema_fts.schema_id = :schema_id AND schema_fts MATCH :query
            ORDER BY score DESC, rowid ASC
            LIMIT :limit
            """
        )
        try:
            with database.connect() as conn:
                rows = conn.execute(
                    statement, {"schema_id": schema_id, "query": match_query, "limit": limit}
                ).all()
        except OperationalError as exc:
            if "no such table" in str(exc):
                raise IndexUnavailableError(
                    f"Search index for schema {schema_id!r} is incomplete", schema_id
                ) from exc
            raise SearchError(f"Search failed: {exc}", schema_id) from exc
        except SQLAlchemyError as exc:
            raise SearchError(f"Search failed: {exc}", schema_id) from exc

        logger.debug(
            "Search completed",
            extra={"schema_id": schema_id, "query": query, "results_count": len(rows)},
        )
        return [
            SearchResult(
                kind=row.kind,
                name=row.name,
                path=row.path,
                description=row.description or "",
                score=float(row.score),
            )
            for row in rows
        ]
