"""SQLite storage for per-schema full-text search indexes."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection, Engine

INDEX_SUFFIX = ".db"

# Column order matters: bm25() weights are positional.
DOCUMENT_COLUMNS: tuple[str, ...] = ("schema_id", "kind", "name", "path", "description")

DDL_STATEMENTS: tuple[str, ...] = (
    """
    CREATE VIRTUAL TABLE IF NOT EXISTS schema_fts USING fts5(
        schema_id UNINDEXED,
        kind,
        name,
        path,
        description,
        tokenize='porter unicode61',
        prefix='2 3'
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS index_meta (
        schema_id TEXT PRIMARY KEY,
        document_count INTEGER NOT NULL DEFAULT 0,
        indexed_at TEXT NOT NULL
    )
    """,
)


def validate_schema_id(schema_id: str) -> str:
    if not schema_id or not schema_id.strip():
        raise ValueError("Schema ID cannot be empty")
    if "/" in schema_id or "\\" in schema_id or schema_id in {".", ".."}:
        raise ValueError(f"Schema ID must not contain path separators: {schema_id!r}")
    return schema_id


class IndexDatabase:
    """One SQLite file holding the FTS index for a single schema."""

    def __init__(self, base_dir: str | Path, schema_id: str):
        self.schema_id = validate_schema_id(schema_id)
        self.db_path = Path(base_dir) / f"{schema_id}{INDEX_SUFFIX}"

    def exists(self) -> bool:
        return self.db_path.is_file()

    def delete(self) -> None:
        self.db_path.unlink(missing_ok=True)

    def _ensure_directory(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_engine(self) -> Engine:
        # URL.create keeps "?" and "#" in the file name literal
        return create_engine(URL.create("sqlite", database=str(self.db_path)))

    @contextmanager
    def connect(self, *, create: bool = False) -> Iterator[Connection]:
        """Yield a transactional connection, disposing the engine afterwards."""
        if create:
            self._ensure_directory()
        engine = self.create_engine()
        try:
            with engine.begin() as conn:
                yield conn
        finally:
            engine.dispose()

    def initialize(self, statements: Iterable[str] | None = None) -> Path:
        """Create all schema artifacts required for indexing."""
        with self.connect(create=True) as conn:
            for statement in statements or DDL_STATEMENTS:
                conn.execute(text(statement))
        return self.db_path


__all__ = ["IndexDatabase", "DDL_STATEMENTS", "DOCUMENT_COLUMNS", "validate_schema_id"]
