"""
Excepciones de la aplicación.
"""
from positions_sync.shared.exceptions.base import AppException
from positions_sync.shared.exceptions.domain import (
    DatabaseException,
    DirectoryCreationException,
    DuplicateKeyException,
    EmptySnapshotException,
    ExportWriteException,
    MalformedDocumentException,
    MalformedEntryException,
    SnapshotException,
    SnapshotFileNotFoundException,
)

__all__ = [
    "AppException",
    "DatabaseException",
    "DirectoryCreationException",
    "DuplicateKeyException",
    "EmptySnapshotException",
    "ExportWriteException",
    "MalformedDocumentException",
    "MalformedEntryException",
    "SnapshotException",
    "SnapshotFileNotFoundException",
]
