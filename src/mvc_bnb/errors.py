"""
Exceptions raised by the vertex cover package.
"""
from typing import Optional


class MVCError(Exception):
    """Base class for every error raised by mvc_bnb."""


class InvalidGraphError(MVCError, ValueError):
    """Graph data that cannot form a simple undirected graph."""


class InvalidClqFileFormat(InvalidGraphError):
    """
    A graph file that could not be parsed.

    Args:
        message: What went wrong
        path: File being parsed, if known
        line_number: 1-based line where parsing stopped, if known
    """

    def __init__(self, message: str, path: Optional[str] = None, line_number: Optional[int] = None):
        self.message = message
        self.path = path
        self.line_number = line_number
        super().__init__(str(self))

    def __str__(self):
        location = ""
        if self.path is not None:
            location = f"{self.path}"
        if self.line_number is not None:
            location = f"{location}:{self.line_number}" if location else f"line {self.line_number}"
        return f"{location}: {self.message}" if location else self.message


class KnownOptimalStoreError(MVCError):
    """The known-optimal YAML store could not be used."""


class StoreNotFoundError(KnownOptimalStoreError):
    """The store file does not exist or cannot be opened."""


class StoreFormatError(KnownOptimalStoreError):
    """The store file is not valid YAML or does not have the expected layout."""


class GraphNotFoundError(KnownOptimalStoreError):
    """The requested graph id has no entry in the store."""
