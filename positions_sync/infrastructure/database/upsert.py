"""
Estrategias de UPSERT por clave natural (depcode, depjob).

- NativeUpsert: INSERT ... ON CONFLICT (depcode, depjob) DO UPDATE en un
  único statement (PostgreSQL, SQLite).
- SelectThenBranchUpsert: para dialectos sin primitiva nativa; consulta las
  claves existentes (join contra el staging) y luego INSERT/UPDATE, todo
  dentro de la misma transacción.

Ambas solo sobreescriben description y solo cuando cambia, de modo que una
segunda corrida idéntica no modifica filas.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from sqlalchemy import Table, and_, bindparam, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Connection

from positions_sync.shared.exceptions.base import AppException


InsertFactory = Callable[[Table], Any]

_NATIVE_INSERTS: dict[str, InsertFactory] = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class UpsertStrategyError(AppException):
    """Estrategia de upsert desconocida (SYNC_UPSERT_STRATEGY)."""

    def __init__(self, strategy: str):
        super().__init__(
            message=f"Estrategia de upsert desconocida: {strategy}",
            error_code="CONFIG_ERROR",
            details={"strategy": strategy},
            exit_code=2,
        )


class UpsertStrategy:
    name = "base"

    def apply(
        self,
        conn: Connection,
        *,
        target: Table,
        staging: Table,
        rows: Iterable[dict[str, Any]],
    ) -> None:
        raise NotImplementedError


class NativeUpsert(UpsertStrategy):
    name = "native"

    def __init__(self, insert_factory: InsertFactory) -> None:
        self._insert = insert_factory

    def build_statement(self, target: Table):
        """
        INSERT ... ON CONFLICT (depcode, depjob)
        DO UPDATE SET description = EXCLUDED.description
        WHERE target.description IS DISTINCT FROM EXCLUDED.description
        """
        stmt = self._insert(target)
        excluded = stmt.excluded
        return stmt.on_conflict_do_update(
            index_elements=[target.c.dep_code, target.c.dep_job],
            set_={target.c.description: excluded.description},
            where=target.c.description.is_distinct_from(excluded.description),
        )

    def apply(self, conn, *, target, staging, rows) -> None:
        rows_list = list(rows)
        if not rows_list:
            return
        conn.execute(self.build_statement(target), rows_list)


class SelectThenBranchUpsert(UpsertStrategy):
    name = "select_then_branch"

    def apply(self, conn, *, target, staging, rows) -> None:
        rows_list = list(rows)
        if not rows_list:
            return

        # Solo se traen las filas de la tabla que ya están en el snapshot.
        matched = select(target.c.dep_code, target.c.dep_job, target.c.description).select_from(
            target.join(
                staging,
                and_(
                    staging.c.dep_code == target.c.dep_code,
                    staging.c.dep_job == target.c.dep_job,
                ),
            )
        )
        existing = {
            (dep_code, dep_job): description
            for dep_code, dep_job, description in conn.execute(matched)
        }

        inserts = []
        updates = []
        for row in rows_list:
            key = (row["dep_code"], row["dep_job"])
            if key not in existing:
                inserts.append(row)
            elif existing[key] != row["description"]:
                updates.append(
                    {
                        "b_dep_code": row["dep_code"],
                        "b_dep_job": row["dep_job"],
                        "b_description": row["description"],
                    }
                )

        if inserts:
            conn.execute(insert(target), inserts)
        if updates:
            stmt = (
                update(target)
                .where(target.c.dep_code == bindparam("b_dep_code"))
                .where(target.c.dep_job == bindparam("b_dep_job"))
                .values(description=bindparam("b_description"))
            )
            conn.execute(stmt, updates)


def upsert_strategy_for(dialect_name: str, preference: Optional[str] = "auto") -> UpsertStrategy:
    """
    Selecciona la estrategia:
    - auto: nativa si el dialecto la soporta, si no select-then-branch
    - select_then_branch: fuerza la estrategia portable
    """
    preference = (preference or "auto").lower()
    if preference == "select_then_branch":
        return SelectThenBranchUpsert()
    if preference != "auto":
        raise UpsertStrategyError(preference)

    factory = _NATIVE_INSERTS.get(dialect_name)
    if factory is None:
        return SelectThenBranchUpsert()
    return NativeUpsert(factory)
