"""
Tests del SQL generado para staging y upsert (sin BD real).
"""
import pytest
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.schema import CreateTable

from positions_sync.infrastructure.database.models import PositionModel
from positions_sync.infrastructure.database.staging import (
    PostgresStagingArea,
    StagingArea,
    build_staging_table,
    staging_area_for,
)
from positions_sync.infrastructure.database.upsert import (
    NativeUpsert,
    SelectThenBranchUpsert,
    UpsertStrategyError,
    upsert_strategy_for,
)


def _compact(sql) -> str:
    return " ".join(str(sql).split())


def test_native_upsert_generates_on_conflict_with_change_guard() -> None:
    stmt = NativeUpsert(postgresql.insert).build_statement(PositionModel.__table__)
    sql = _compact(stmt.compile(dialect=postgresql.dialect()))

    assert "ON CONFLICT (depcode, depjob) DO UPDATE SET description = excluded.description" in sql
    assert "WHERE positions.description IS DISTINCT FROM excluded.description" in sql


def test_native_upsert_on_sqlite() -> None:
    stmt = NativeUpsert(sqlite.insert).build_statement(PositionModel.__table__)
    sql = _compact(stmt.compile(dialect=sqlite.dialect()))

    assert "ON CONFLICT (depcode, depjob) DO UPDATE SET description = excluded.description" in sql


def test_staging_table_is_temporary_and_dropped_on_commit_in_postgres() -> None:
    ddl = _compact(CreateTable(build_staging_table()).compile(dialect=postgresql.dialect()))

    assert ddl.startswith("CREATE TEMPORARY TABLE temp_positions")
    assert "PRIMARY KEY (depcode, depjob)" in ddl
    assert ddl.endswith("ON COMMIT DROP")


def test_staging_table_is_temporary_in_sqlite() -> None:
    ddl = _compact(CreateTable(build_staging_table()).compile(dialect=sqlite.dialect()))

    assert ddl.startswith("CREATE TEMPORARY TABLE temp_positions")
    assert "ON COMMIT" not in ddl


def test_staging_selection_by_dialect() -> None:
    assert isinstance(staging_area_for("postgresql"), PostgresStagingArea)
    assert staging_area_for("postgresql").drops_on_commit is True
    generic = staging_area_for("sqlite")
    assert type(generic) is StagingArea
    assert generic.drops_on_commit is False


@pytest.mark.parametrize("dialect_name", ["postgresql", "sqlite"])
def test_auto_strategy_is_native_when_supported(dialect_name) -> None:
    assert isinstance(upsert_strategy_for(dialect_name, "auto"), NativeUpsert)


def test_auto_strategy_falls_back_without_native_support() -> None:
    assert isinstance(upsert_strategy_for("mssql", "auto"), SelectThenBranchUpsert)


def test_forced_select_then_branch() -> None:
    assert isinstance(upsert_strategy_for("postgresql", "select_then_branch"), SelectThenBranchUpsert)


def test_unknown_strategy_raises() -> None:
    with pytest.raises(UpsertStrategyError) as exc_info:
        upsert_strategy_for("postgresql", "merge")

    assert exc_info.value.exit_code == 2
