"""Exception hierarchy raised by bulkbatch."""


class BulkBatchError(Exception):
    """Base class for all bulkbatch errors."""


class DatabaseConnectionError(BulkBatchError):
    """The database connection could not be opened. Nothing can proceed."""


class MalformedInputError(BulkBatchError, ValueError):
    """Input rejected before any transaction was opened."""


class StorageError(BulkBatchError):
    """A statement, begin, commit or rollback failed inside the store.

    The message is the driver's own; the driver exception is chained as
    ``__cause__``.
    """
