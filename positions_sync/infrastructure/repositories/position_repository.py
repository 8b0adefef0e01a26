"""
Repositorio para la tabla positions.

Opera sobre una conexión Core; el caller controla la transacción.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List

from sqlalchemy import Table, and_, delete, exists, func, select
from sqlalchemy.engine import Connection

from positions_sync.domain.entities.position import Position
from positions_sync.infrastructure.database.models import PositionModel
from positions_sync.infrastructure.database.upsert import UpsertStrategy


@dataclass(frozen=True)
class ReconciliationPlan:
    """
    Diferencia calculada por la BD entre la tabla y el staging,
    antes de aplicar cambios.
    """

    to_delete: int
    to_insert: int
    to_update: int
    unchanged: int


def _same_key(left: Table, right: Table):
    return and_(left.c.dep_code == right.c.dep_code, left.c.dep_job == right.c.dep_job)


class PositionRepository:
    """
    Gestiona la tabla positions.
    """
    
    def __init__(self, conn: Connection):
        self.conn = conn
        self.table: Table = PositionModel.__table__

    def fetch_all(self) -> List[Position]:
        """
        Obtiene todas las filas, ordenadas por clave natural.
        """
        query = select(
            self.table.c.dep_code,
            self.table.c.dep_job,
            self.table.c.description,
        ).order_by(self.table.c.dep_code, self.table.c.dep_job)
        return [
            Position(dep_code=dep_code, dep_job=dep_job, description=description)
            for dep_code, dep_job, description in self.conn.execute(query)
        ]

    def plan_against(self, staging: Table) -> ReconciliationPlan:
        """
        Cuenta borrados, inserciones y actualizaciones pendientes
        comparando la tabla con el staging.
        """
        table = self.table

        to_delete = self.conn.execute(
            select(func.count())
            .select_from(table)
            .where(~exists().where(_same_key(staging, table)).correlate(table))
        ).scalar_one()

        to_insert = self.conn.execute(
            select(func.count())
            .select_from(staging)
            .where(~exists().where(_same_key(table, staging)).correlate(staging))
        ).scalar_one()

        to_update = self.conn.execute(
            select(func.count())
            .select_from(staging.join(table, _same_key(staging, table)))
            .where(table.c.description.is_distinct_from(staging.c.description))
        ).scalar_one()

        staged = self.conn.execute(select(func.count()).select_from(staging)).scalar_one()

        return ReconciliationPlan(
            to_delete=to_delete,
            to_insert=to_insert,
            to_update=to_update,
            unchanged=staged - to_insert - to_update,
        )

    def delete_unmatched(self, staging: Table) -> int:
        """
        Elimina las filas cuya clave natural no está en el staging:
        DELETE FROM positions WHERE NOT EXISTS (SELECT ... FROM staging WHERE clave = clave)
        """
        stmt = delete(self.table).where(
            ~exists().where(_same_key(staging, self.table)).correlate(self.table)
        )
        result = self.conn.execute(stmt)
        return result.rowcount or 0

    def upsert(
        self,
        staging: Table,
        rows: Iterable[dict[str, Any]],
        strategy: UpsertStrategy,
    ) -> None:
        """Inserta/actualiza las filas del snapshot usando la estrategia indicada."""
        strategy.apply(self.conn, target=self.table, staging=staging, rows=rows)
