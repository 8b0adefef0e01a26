"""
Staging area: espejo temporal del snapshot dentro de la BD.

Permite que la BD calcule la diferencia tabla \\ snapshot con sus propios
índices (NOT EXISTS sobre la clave natural) en lugar de traer la tabla
completa al cliente.

- PostgreSQL: CREATE TEMPORARY TABLE ... ON COMMIT DROP (desaparece con el
  commit; si hay rollback, el CREATE también se revierte).
- Otros dialectos: tabla temporaria por conexión que se elimina
  explícitamente al terminar la transacción.
"""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import Column, MetaData, String, Table, insert, text
from sqlalchemy.engine import Connection

from positions_sync.infrastructure.database.models import (
    DEP_CODE_LENGTH,
    DEP_JOB_LENGTH,
    DESCRIPTION_LENGTH,
)


STAGING_TABLE_NAME = "temp_positions"


def build_staging_table(name: str = STAGING_TABLE_NAME) -> Table:
    """
    Define la tabla temporaria. El PK (depcode, depjob) da el índice
    que usa el NOT EXISTS de la fase de borrado.

    Usa su propio MetaData para no registrarse en Base.metadata.
    """
    return Table(
        name,
        MetaData(),
        Column("depcode", String(DEP_CODE_LENGTH), key="dep_code", primary_key=True),
        Column("depjob", String(DEP_JOB_LENGTH), key="dep_job", primary_key=True),
        Column("description", String(DESCRIPTION_LENGTH), nullable=True),
        prefixes=["TEMPORARY"],
        postgresql_on_commit="DROP",
    )


class StagingArea:
    """
    Staging genérico: la tabla temporaria vive en la conexión y
    release() la elimina una vez cerrada la transacción.
    """

    drops_on_commit = False

    def __init__(self, name: str = STAGING_TABLE_NAME) -> None:
        self.table = build_staging_table(name)

    def create(self, conn: Connection) -> None:
        self.table.create(conn)

    def load(self, conn: Connection, rows: Iterable[dict[str, Any]]) -> int:
        """Carga masiva (executemany). Retorna la cantidad de filas."""
        rows_list = list(rows)
        if not rows_list:
            return 0
        conn.execute(insert(self.table), rows_list)
        return len(rows_list)

    def release(self, conn: Connection) -> None:
        """
        Se llama después de commit/rollback. No hace nada si la conexión
        quedó invalidada (la BD descarta la tabla temporaria con la sesión).
        """
        if self.drops_on_commit or conn.closed or conn.invalidated:
            return
        conn.execute(text(f"DROP TABLE IF EXISTS {self.table.name}"))
        conn.commit()


class PostgresStagingArea(StagingArea):
    """Staging con ON COMMIT DROP: no requiere limpieza explícita."""

    drops_on_commit = True


def staging_area_for(dialect_name: str) -> StagingArea:
    """Selecciona la implementación del staging según el dialecto."""
    if dialect_name == "postgresql":
        return PostgresStagingArea()
    return StagingArea()
