"""Exceptions raised while loading bundled definitions or the knowledge ledger."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when a JSON file is missing, unreadable or not valid JSON."""


class DataValidationError(DataError):
    """Raised when JSON content does not have the expected shape."""


class DataReferenceError(DataError):
    """Raised when a definition names a category or id that does not exist."""


class KnowledgeStoreError(DataError):
    """Raised when the knowledge ledger cannot be written."""
