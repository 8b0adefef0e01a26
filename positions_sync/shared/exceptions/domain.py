"""
Excepciones del dominio de sincronización de positions.

Errores de lectura del snapshot (se detectan antes de tocar la BD):
- SnapshotFileNotFoundException
- EmptySnapshotException
- MalformedDocumentException
- MalformedEntryException
- DuplicateKeyException

Errores de exportación:
- DirectoryCreationException
- ExportWriteException

Errores de base de datos (la transacción ya fue revertida):
- DatabaseException
"""
from pathlib import Path
from typing import Any

from positions_sync.shared.exceptions.base import AppException


class SnapshotException(AppException):
    """Excepción base para errores del snapshot XML."""
    
    def __init__(self, message: str, error_code: str = "SNAPSHOT_ERROR", details=None):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details
        )


class SnapshotFileNotFoundException(SnapshotException):
    """Excepción cuando el archivo XML no existe."""
    
    def __init__(self, path: Path):
        super().__init__(
            message=f"Archivo no encontrado: {path}",
            error_code="FILE_NOT_FOUND",
            details={"path": str(path)}
        )


class EmptySnapshotException(SnapshotException):
    """Excepción cuando el XML no contiene ningún <position>."""
    
    def __init__(self, path: Path):
        super().__init__(
            message=f"El archivo XML está vacío, la sincronización no es posible: {path}",
            error_code="EMPTY_INPUT",
            details={"path": str(path)}
        )


class MalformedDocumentException(SnapshotException):
    """Excepción cuando el archivo no es un XML bien formado."""
    
    def __init__(self, path: Path, reason: str):
        super().__init__(
            message=f"XML inválido en {path}: {reason}",
            error_code="MALFORMED_DOCUMENT",
            details={"path": str(path), "reason": reason}
        )


class MalformedEntryException(SnapshotException):
    """Excepción cuando a un <position> le falta un campo obligatorio."""
    
    def __init__(self, index: int, field: str):
        super().__init__(
            message=f"El <position> #{index} no contiene el campo obligatorio <{field}>",
            error_code="MALFORMED_ENTRY",
            details={"index": index, "field": field}
        )
        self.index = index
        self.field = field


class DuplicateKeyException(SnapshotException):
    """Excepción cuando dos <position> comparten la misma clave natural."""
    
    def __init__(self, key: Any):
        super().__init__(
            message=f"Clave natural duplicada en el XML: {key}",
            error_code="DUPLICATE_KEY",
            details={"key": str(key)}
        )
        self.key = key


class DirectoryCreationException(AppException):
    """Excepción cuando no se puede crear el directorio destino del export."""
    
    def __init__(self, directory: Path, reason: str):
        super().__init__(
            message=f"No se pudo crear el directorio para guardar el XML: {directory}",
            error_code="DIRECTORY_CREATION_ERROR",
            details={"directory": str(directory), "reason": reason}
        )


class ExportWriteException(AppException):
    """Excepción cuando falla la escritura del archivo XML."""
    
    def __init__(self, path: Path, reason: str):
        super().__init__(
            message=f"No se pudo escribir el archivo XML {path}: {reason}",
            error_code="WRITE_ERROR",
            details={"path": str(path), "reason": reason}
        )


class DatabaseException(AppException):
    """
    Excepción para cualquier error de base de datos (constraint, conexión,
    abort de la transacción). Cuando se levanta, la transacción ya fue revertida.
    """
    
    def __init__(self, operation: str, reason: str):
        super().__init__(
            message=f"Error de base de datos durante '{operation}': {reason}",
            error_code="DATABASE_ERROR",
            details={"operation": operation, "reason": reason}
        )
        self.operation = operation
