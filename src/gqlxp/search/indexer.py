"""Build per-schema full-text indexes from a parsed schema."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import time
from typing import List, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from gqlxp.gql.types import Argument, Field, GraphQLSchema

from .database import IndexDatabase
from .models import SearchDocument
from .searcher import SearchError

logger = logging.getLogger(__name__)

INSERT_DOCUMENT = text(
    """
    INSERT INTO schema_fts (schema_id, kind, name, path, description)
    VALUES (:schema_id, :kind, :name, :path, :description)
    """
)


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def extract_documents(schema_id: str, schema: GraphQLSchema) -> List[SearchDocument]:
    """Flatten a schema into one searchable document per named entity."""
    docs: List[SearchDocument] = []

    for name, field_def in schema.query.items():
        docs.append(SearchDocument("Field", name, field_def.description, f"Query.{name}", schema_id))
    for name, field_def in schema.mutation.items():
        docs.append(SearchDocument("Field", name, field_def.description, f"Mutation.{name}", schema_id))

    for name, obj in schema.objects.items():
        docs.append(SearchDocument("Object", name, obj.description, name, schema_id))
        docs.extend(_field_documents(schema_id, name, obj.fields))

    for name, input_obj in schema.inputs.items():
        docs.append(SearchDocument("InputObject", name, input_obj.description, name, schema_id))
        docs.extend(_field_documents(schema_id, name, input_obj.fields))

    for name, enum in schema.enums.items():
        docs.append(SearchDocument("Enum", name, enum.description, name, schema_id))

    for name, scalar in schema.scalars.items():
        docs.append(SearchDocument("Scalar", name, scalar.description, name, schema_id))

    for name, iface in schema.interfaces.items():
        docs.append(SearchDocument("Interface", name, iface.description, name, schema_id))
        docs.extend(_field_documents(schema_id, name, iface.fields))

    for name, union in schema.unions.items():
        docs.append(SearchDocument("Union", name, union.description, name, schema_id))

    for name, directive in schema.directives.items():
        docs.append(SearchDocument("Directive", name, directive.description, f"@{name}", schema_id))

    return docs


def _field_documents(
    schema_id: str, type_name: str, fields: Sequence[Field | Argument]
) -> List[SearchDocument]:
    return [
        SearchDocument("Field", f.name, f.description, f"{type_name}.{f.name}", schema_id)
        for f in fields
    ]


class SchemaIndexer:
    """Create, replace and remove schema indexes under a base directory."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def _database(self, schema_id: str) -> IndexDatabase:
        return IndexDatabase(self.base_dir, schema_id)

    def index(self, schema_id: str, schema: GraphQLSchema) -> int:
        """Replace any existing index for ``schema_id``; return the document count."""
        start_time = time.time()
        database = self._database(schema_id)
        docs = extract_documents(schema_id, schema)

        try:
            database.delete()
            database.initialize()
            with database.connect() as conn:
                if docs:
                    conn.execute(INSERT_DOCUMENT, [doc.to_row() for doc in docs])
                conn.execute(
                    text(
                        """
                        INSERT OR REPLACE INTO index_meta (schema_id, document_count, indexed_at)
                        VALUES (:schema_id, :document_count, :indexed_at)
                        """
                    ),
                    {
                        "schema_id": schema_id,
                        "document_count": len(docs),
                        "indexed_at": _utcnow_iso(),
                    },
                )
        except (SQLAlchemyError, OSError) as exc:
            logger.error("Failed to index schema", extra={"schema_id": schema_id, "error": str(exc)})
            # No partial index survives a failed build
            database.delete()
            raise SearchError(f"Failed to index schema {schema_id!r}: {exc}") from exc

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Schema indexed successfully",
            extra={
                "schema_id": schema_id,
                "documents_count": len(docs),
                "duration_ms": f"{duration_ms:.2f}",
            },
        )
        return len(docs)

    def remove(self, schema_id: str) -> None:
        """Delete the index for ``schema_id``; a missing index is not an error."""
        try:
            self._database(schema_id).delete()
        except OSError as exc:
            raise SearchError(f"Failed to remove index {schema_id!r}: {exc}") from exc
        logger.info("Schema index removed", extra={"schema_id": schema_id})

    def exists(self, schema_id: str) -> bool:
        return self._database(schema_id).exists()

    def document_count(self, schema_id: str) -> Optional[int]:
        """Return the number of indexed documents, or None when not indexed."""
        database = self._database(schema_id)
        if not database.exists():
            return None
        try:
            with database.connect() as conn:
                row = conn.execute(
                    text("SELECT document_count FROM index_meta WHERE schema_id = :schema_id"),
                    {"schema_id": schema_id},
                ).first()
        except SQLAlchemyError as exc:
            raise SearchError(f"Failed to read index metadata for {schema_id!r}: {exc}") from exc
        return int(row[0]) if row else None
