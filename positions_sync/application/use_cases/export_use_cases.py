"""
Caso de uso: exportar la tabla positions a un archivo XML.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from positions_sync.application.dto.sync_dto import ExportResultDTO
from positions_sync.infrastructure.repositories.position_repository import PositionRepository
from positions_sync.infrastructure.xml.snapshot_writer import write_snapshot
from positions_sync.shared.exceptions.domain import DatabaseException


class PositionExportUseCases:
    """Exporta todas las filas de positions (transacción de solo lectura propia)."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def export(self, path: Union[str, Path]) -> ExportResultDTO:
        """
        Raises:
            DatabaseException, DirectoryCreationException, ExportWriteException
        """
        path = Path(path)
        logger.info(f"Iniciando exportación hacia {path}")

        try:
            with self._engine.connect() as conn:
                positions = PositionRepository(conn).fetch_all()
        except SQLAlchemyError as e:
            logger.error(f"Error leyendo positions: {e}")
            raise DatabaseException("export", str(e)) from e

        exported = write_snapshot(positions, path)
        logger.info(f"XML creado: {path} ({exported} filas)")
        return ExportResultDTO(path=str(path), exported=exported)
