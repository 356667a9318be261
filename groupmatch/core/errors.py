"""Typed errors for the matching engine and its document store."""


class GroupMatchError(Exception):
    """Base error; ``retryable`` tells callers whether trying again can help."""
    def __init__(self, message: str, *, retryable: bool = False):
        super().__init__(message)
        self.retryable = retryable


class StoreError(GroupMatchError):
    """Document store read or write failed."""


class StoreUnavailableError(StoreError):
    """Transient store failure (network, timeout, backend down)."""
    def __init__(self, message: str):
        super().__init__(message, retryable=True)


class ConflictError(StoreError):
    """A batch precondition failed: a consumed document changed or vanished."""
    def __init__(self, message: str, *, collection: str = "", document_id: str = ""):
        super().__init__(message, retryable=True)
        self.collection = collection
        self.document_id = document_id


class EventNotFoundError(GroupMatchError):
    """Requested pending event does not exist."""


class NotEventOwnerError(GroupMatchError):
    """User tried to modify a pending event they did not create."""
