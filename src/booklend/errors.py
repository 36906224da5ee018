# ABOUTME: Exception hierarchy for booklend operations.
# ABOUTME: Callers catch these by category; the CLI maps them to messages and exit codes.


class BooklendError(Exception):
    """Base class for every error raised by a booklend operation."""


class ValidationError(BooklendError):
    """Required input is missing or malformed. Not retryable."""


class NotFoundError(BooklendError):
    """The identifier is not present in the catalog, ledger, or providers."""


class NotInInventoryError(NotFoundError):
    """The isbn is not registered in our own catalog."""

    def __init__(self, isbn: str) -> None:
        super().__init__(f"{isbn} is not in our inventory")
        self.isbn = isbn


class NotLentError(NotFoundError):
    """No open loan exists for the isbn."""

    def __init__(self, isbn: str) -> None:
        super().__init__(f"{isbn} is not currently lent")
        self.isbn = isbn


class ConflictError(BooklendError):
    """The operation would violate a uniqueness rule and did not happen."""


class DuplicateEntryError(ConflictError):
    """Raised when registering an isbn that is already in the catalog."""

    def __init__(self, isbn: str) -> None:
        super().__init__(f"{isbn} is already registered")
        self.isbn = isbn


class AlreadyLentError(ConflictError):
    """Raised when borrowing an isbn that already has an open loan."""

    def __init__(self, isbn: str, due_at: str) -> None:
        super().__init__(f"{isbn} is already lent (due {due_at})")
        self.isbn = isbn
        self.due_at = due_at


class UnauthorizedError(BooklendError):
    """No verified identity was supplied for an operation that needs one."""


class UpstreamError(BooklendError):
    """A provider or store call failed after exhausting retries."""


class ConfigurationError(BooklendError):
    """A required credential or setting is missing."""
