"""Document store interface consumed by the matching engine."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

# Query operators understood by every store implementation
EQ = "=="
NE = "!="
ARRAY_CONTAINS = "array-contains"
OPERATORS = (EQ, NE, ARRAY_CONTAINS)


@dataclass
class InsertOp:
    """Create ``document`` under ``document_id`` in ``collection``."""
    collection: str
    document_id: str
    document: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DeleteOp:
    """
    Delete a document.

    When ``expected_version`` is set the document must still exist with that
    ``version`` value, otherwise the whole batch fails with ConflictError.
    """
    collection: str
    document_id: str
    expected_version: Optional[int] = None


BatchOperation = Union[InsertOp, DeleteOp]


class DocumentStore(ABC):
    """
    Minimal async document store.

    Documents are plain dicts; returned documents carry their id under "id".
    Implementations raise StoreUnavailableError for backend failures and
    ConflictError for failed batch preconditions.
    """

    @abstractmethod
    async def query_by_field(
        self,
        collection: str,
        field_name: str,
        operator: str,
        value: Any,
    ) -> List[Dict[str, Any]]:
        """Documents whose ``field_name`` satisfies ``operator`` against ``value``."""
        ...

    @abstractmethod
    async def insert(self, collection: str, document: Dict[str, Any]) -> str:
        """Insert a document and return its new id."""
        ...

    @abstractmethod
    async def delete_by_id(self, collection: str, document_id: str) -> None:
        ...

    @abstractmethod
    async def atomic_batch(self, operations: List[BatchOperation]) -> None:
        """Apply every operation or none of them."""
        ...

    @abstractmethod
    async def get_by_id(self, collection: str, document_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def list_all(self, collection: str) -> List[Dict[str, Any]]:
        ...
