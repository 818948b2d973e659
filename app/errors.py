"""Exceptions raised by the markdown pipeline and the file storage layer."""


class ConversionError(Exception):
    """The markdown parser or renderer failed unexpectedly.

    Malformed markdown never raises; this is reserved for internal failures
    such as recursion or memory exhaustion inside the parser.
    """


class StorageError(Exception):
    """A file could not be stored, read or deleted."""


class StoredFileNotFoundError(StorageError):
    """No file exists at the requested storage path."""


class UnsafePathError(StorageError):
    """The requested path resolves outside the storage base directory."""
