"""In-process document store for tests and local runs."""
from copy import deepcopy
from typing import Any, Dict, List, Optional
from uuid import uuid4
import logging

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


def _matches(doc: Dict[str, Any], field_name: str, operator: str, value: Any) -> bool:
    if operator == EQ:
        return doc.get(field_name) == value
    if operator == NE:
        # Like Firestore, documents missing the field never match "!="
        return field_name in doc and doc[field_name] != value
    if operator == ARRAY_CONTAINS:
        current = doc.get(field_name)
        return isinstance(current, list) and value in current
    raise ValueError(f"Unsupported operator: {operator}")


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed store with all-or-nothing batches and delete preconditions.

    Set ``fail_reads`` / ``fail_writes`` to simulate an unavailable backend.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.fail_reads = False
        self.fail_writes = False

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    def _check_read(self) -> None:
        if self.fail_reads:
            raise StoreUnavailableError("In-memory store read failure (simulated)")

    def _check_write(self) -> None:
        if self.fail_writes:
            raise StoreUnavailableError("In-memory store write failure (simulated)")

    @staticmethod
    def _with_id(document_id: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        return {**deepcopy(doc), "id": document_id}

    async def query_by_field(self, collection, field_name, operator, value):
        self._check_read()
        return [
            self._with_id(doc_id, doc)
            for doc_id, doc in self._collection(collection).items()
            if _matches(doc, field_name, operator, value)
        ]

    async def insert(self, collection, document):
        self._check_write()
        document_id = str(uuid4())
        body = {k: v for k, v in deepcopy(document).items() if k != "id"}
        self._collection(collection)[document_id] = body
        return document_id

    async def delete_by_id(self, collection, document_id):
        self._check_write()
        self._collection(collection).pop(document_id, None)

    async def atomic_batch(self, operations: List[BatchOperation]) -> None:
        self._check_write()

        # Validate every precondition before touching anything
        for op in operations:
            if isinstance(op, DeleteOp) and op.expected_version is not None:
                current = self._collection(op.collection).get(op.document_id)
                if current is None or current.get("version", 1) != op.expected_version:
                    raise ConflictError(
                        f"Document {op.collection}/{op.document_id} changed or was removed",
                        collection=op.collection,
                        document_id=op.document_id,
                    )
            elif isinstance(op, InsertOp):
                if op.document_id in self._collection(op.collection):
                    raise ConflictError(
                        f"Document {op.collection}/{op.document_id} already exists",
                        collection=op.collection,
                        document_id=op.document_id,
                    )

        for op in operations:
            if isinstance(op, InsertOp):
                body = {k: v for k, v in deepcopy(op.document).items() if k != "id"}
                self._collection(op.collection)[op.document_id] = body
            else:
                self._collection(op.collection).pop(op.document_id, None)

        logger.debug(f"Committed batch of {len(operations)} operations")

    async def get_by_id(self, collection, document_id) -> Optional[Dict[str, Any]]:
        self._check_read()
        doc = self._collection(collection).get(document_id)
        return self._with_id(document_id, doc) if doc is not None else None

    async def list_all(self, collection):
        self._check_read()
        return [self._with_id(k, v) for k, v in self._collection(collection).items()]
