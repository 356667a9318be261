"""Supabase-backed document store."""
from asyncio import to_thread
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

from groupmatch.core.errors import ConflictError, StoreUnavailableError
from groupmatch.database.store import (
    ARRAY_CONTAINS,
    EQ,
    NE,
    BatchOperation,
    DeleteOp,
    DocumentStore,
    InsertOp,
)

logger = logging.getLogger(__name__)

# Raised by apply_document_batch() when a delete precondition fails
SERIALIZATION_FAILURE = "40001"
BATCH_FUNCTION = "apply_document_batch"


def _serialize_operation(op: BatchOperation) -> dict:
    if isinstance(op, InsertOp):
        return {
            "op": "insert",
            "collection": op.collection,
            "id": op.document_id,
            "document": op.document,
        }
    return {
        "op": "delete",
        "collection": op.collection,
        "id": op.document_id,
        "expected_version": op.expected_version,
    }


class SupabaseDocumentStore(DocumentStore):
    """
    Each collection is a table whose columns match the document fields.

    Atomic batches are executed by the ``apply_document_batch`` Postgres
    function (see supabase_schema.sql) so they run in one transaction.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def query_by_field(self, collection, field_name, operator, value):
        try:
            def _query():
                q = self.supabase.table(collection).select("*")
                if operator == EQ:
                    q = q.eq(field_name, value)
                elif operator == NE:
                    q = q.neq(field_name, value)
                elif operator == ARRAY_CONTAINS:
                    q = q.contains(field_name, [value])
                else:
                    raise ValueError(f"Unsupported operator: {operator}")
                return q.execute()

            response = await to_thread(_query)
            return response.data if response.data else []
        except ValueError:
            raise
        except Exception as e:
            logger.error(f"Error querying {collection} by {field_name}: {e}")
            raise StoreUnavailableError(f"Query on {collection} failed") from e

    async def insert(self, collection, document):
        try:
            data = {k: v for k, v in document.items() if k != "id"}
            response = await to_thread(
                lambda: self.supabase.table(collection).insert(data).execute()
            )
        except Exception as e:
            logger.error(f"Error inserting into {collection}: {e}")
            raise StoreUnavailableError(f"Insert into {collection} failed") from e

        if not response.data:
            raise StoreUnavailableError(f"Insert into {collection} returned no row")
        return str(response.data[0]["id"])

    async def delete_by_id(self, collection, document_id):
        try:
            await to_thread(
                lambda: self.supabase.table(collection)
                .delete()
                .eq("id", document_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Error deleting {collection}/{document_id}: {e}")
            raise StoreUnavailableError(f"Delete from {collection} failed") from e

    async def atomic_batch(self, operations: List[BatchOperation]) -> None:
        payload = [_serialize_operation(op) for op in operations]
        try:
            await to_thread(
                lambda: self.supabase.rpc(BATCH_FUNCTION, {"operations": payload}).execute()
            )
        except Exception as e:
            if getattr(e, "code", None) == SERIALIZATION_FAILURE:
                logger.warning(f"Batch precondition failed: {e}")
                raise ConflictError(str(getattr(e, "message", e))) from e
            logger.error(f"Error committing batch: {e}")
            raise StoreUnavailableError("Atomic batch commit failed") from e

        deleted = sum(1 for op in operations if isinstance(op, DeleteOp))
        logger.debug(f"Committed batch ({len(operations) - deleted} inserts, {deleted} deletes)")

    async def get_by_id(self, collection, document_id) -> Optional[Dict[str, Any]]:
        try:
            response = await to_thread(
                lambda: self.supabase.table(collection)
                .select("*")
                .eq("id", document_id)
                .execute()
            )
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Error getting {collection}/{document_id}: {e}")
            raise StoreUnavailableError(f"Read from {collection} failed") from e

    async def list_all(self, collection):
        try:
            response = await to_thread(
                lambda: self.supabase.table(collection).select("*").execute()
            )
            return response.data if response.data else []
        except Exception as e:
            logger.error(f"Error listing {collection}: {e}")
            raise StoreUnavailableError(f"Read from {collection} failed") from e
