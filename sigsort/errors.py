"""
Exception hierarchy for sigsort.

Sorting and writing never raise on well-formed trees; errors come from
loading input documents and configuration.
"""


class SigsortError(Exception):
    """Base class for all sigsort errors."""

    pass


class SerializationError(SigsortError):
    """Raised when a serialized declaration tree cannot be loaded."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
