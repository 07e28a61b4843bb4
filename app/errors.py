class SyntaxRushError(Exception):
    """Base class for application errors."""


class StorageError(SyntaxRushError):
    """Persistent store could not be read or written."""


class DatabaseError(StorageError):
    pass
