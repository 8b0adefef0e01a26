"""
Configuración de fixtures para pytest.
"""
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple

import pytest
from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from positions_sync.infrastructure.database.models import PositionModel
from positions_sync.infrastructure.database.session import create_db_engine, init_db


Row = Tuple[str, str, Optional[str]]


@pytest.fixture(scope="function")
def engine(tmp_path: Path) -> Engine:
    """
    Engine SQLite sobre un archivo temporal con la tabla positions creada.
    Cada test usa una base de datos nueva.
    """
    db_engine = create_db_engine(f"sqlite:///{tmp_path / 'positions.db'}")
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def seed(engine: Engine) -> Callable[[Iterable[Row]], None]:
    """Inserta filas (dep_code, dep_job, description) directamente en la tabla."""

    def _seed(rows: Iterable[Row]) -> None:
        payload = [
            {"dep_code": dep_code, "dep_job": dep_job, "description": description}
            for dep_code, dep_job, description in rows
        ]
        if not payload:
            return
        with engine.begin() as conn:
            conn.execute(insert(PositionModel.__table__), payload)

    return _seed


@pytest.fixture
def table_rows(engine: Engine) -> Callable[[], set]:
    """Retorna el contenido de la tabla como set de tuplas."""

    def _rows() -> set:
        table = PositionModel.__table__
        with engine.connect() as conn:
            result = conn.execute(select(table.c.dep_code, table.c.dep_job, table.c.description))
            return {tuple(row) for row in result}

    return _rows


def render_snapshot(rows: Iterable[Row]) -> str:
    """Genera el XML de snapshot para las filas indicadas."""
    parts = ['<?xml version="1.0" encoding="UTF-8"?>', "<positions>"]
    for dep_code, dep_job, description in rows:
        parts.append("  <position>")
        parts.append(f"    <depCode>{dep_code}</depCode>")
        parts.append(f"    <depJob>{dep_job}</depJob>")
        parts.append(f"    <description>{description}</description>")
        parts.append("  </position>")
    parts.append("</positions>")
    return "\n".join(parts) + "\n"


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Callable[..., Path]:
    """
    Escribe un archivo de snapshot.
    Acepta filas (se renderizan) o XML crudo vía `raw`.
    """

    def _write(rows: Iterable[Row] = (), *, raw: Optional[str] = None, name: str = "import.xml") -> Path:
        path = tmp_path / name
        path.write_text(raw if raw is not None else render_snapshot(rows), encoding="utf-8")
        return path

    return _write
