"""
Caso de uso: sincronizar la tabla positions con un snapshot XML.

Diseño (resumen):
- Valida y parsea el XML antes de abrir cualquier conexión
- Abre UNA transacción:
    1. crea el staging (tabla temporaria) y lo carga con el snapshot
    2. calcula el plan (borrados / inserciones / actualizaciones)
    3. DELETE de las filas cuya clave no está en el staging (NOT EXISTS)
    4. UPSERT de todas las filas del snapshot
- Commit. Cualquier error de BD revierte todo y se reporta como DatabaseException.

Estrategia de idempotencia:
- delete-then-upsert con upsert condicionado a "description distinta":
  una segunda corrida idéntica no inserta, no actualiza y no borra.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from loguru import logger
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from positions_sync.application.dto.sync_dto import SyncResultDTO
from positions_sync.domain.entities.position import Snapshot
from positions_sync.infrastructure.database.staging import StagingArea, staging_area_for
from positions_sync.infrastructure.database.upsert import UpsertStrategy, upsert_strategy_for
from positions_sync.infrastructure.repositories.position_repository import (
    PositionRepository,
    ReconciliationPlan,
)
from positions_sync.infrastructure.xml.snapshot_parser import parse_snapshot
from positions_sync.shared.exceptions.domain import DatabaseException


class PositionSyncUseCases:
    """
    Motor de reconciliación tabla positions <- snapshot XML.
    """

    def __init__(self, engine: Engine, *, upsert_strategy: Optional[str] = "auto") -> None:
        self._engine = engine
        self._upsert_strategy = upsert_strategy

    def sync(self, path: Union[str, Path]) -> SyncResultDTO:
        """
        Sincroniza la tabla con el archivo indicado (todo o nada).

        Raises:
            SnapshotException: errores del XML (la BD no se toca)
            DatabaseException: error de BD (la transacción fue revertida)
        """
        path = Path(path)
        logger.info(f"Iniciando sincronización desde {path}")

        snapshot = parse_snapshot(path)
        logger.debug(f"Snapshot leído: {len(snapshot)} posiciones")

        dialect_name = self._engine.dialect.name
        staging = staging_area_for(dialect_name)
        strategy = upsert_strategy_for(dialect_name, self._upsert_strategy)

        try:
            with self._engine.connect() as conn:
                try:
                    with conn.begin():
                        plan, deleted = self._reconcile(conn, snapshot, staging, strategy)
                finally:
                    staging.release(conn)
        except SQLAlchemyError as e:
            logger.error(f"Sincronización revertida ({path}): {e}")
            raise DatabaseException("sync", str(e)) from e

        result = SyncResultDTO(
            path=str(path),
            snapshot_size=len(snapshot),
            inserted=plan.to_insert,
            updated=plan.to_update,
            deleted=deleted,
            unchanged=plan.unchanged,
        )
        logger.info(
            f"Sincronización completada: {path} "
            f"(insertadas={result.inserted}, actualizadas={result.updated}, "
            f"eliminadas={result.deleted}, sin cambios={result.unchanged})"
        )
        return result

    def _reconcile(
        self,
        conn: Connection,
        snapshot: Snapshot,
        staging: StagingArea,
        strategy: UpsertStrategy,
    ) -> tuple[ReconciliationPlan, int]:
        repository = PositionRepository(conn)
        rows = snapshot.rows()

        staging.create(conn)
        loaded = staging.load(conn, rows)
        logger.debug(f"Staging cargado: {loaded} filas")

        plan = repository.plan_against(staging.table)

        deleted = repository.delete_unmatched(staging.table)
        logger.debug(f"Eliminadas: {deleted} filas")

        repository.upsert(staging.table, rows, strategy)
        logger.debug(
            f"Upsert ({strategy.name}): insertadas={plan.to_insert}, actualizadas={plan.to_update}"
        )
        return plan, deleted
