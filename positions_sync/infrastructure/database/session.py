"""
Gestión del engine de base de datos.

El CLI usa conexiones Core con transacciones explícitas; no hay sesiones ORM
de larga vida.
"""
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from positions_sync.core.config import settings


# Base para modelos de SQLAlchemy
Base = declarative_base()

_engine: Optional[Engine] = None


def _create_engine_args(url: str) -> dict:
    """
    Construye los argumentos del engine segun el tipo de base de datos.
    PostgreSQL usa pool de conexiones e isolation level configurable,
    SQLite no los soporta.
    """
    args = {
        "echo": settings.DEBUG,
        "future": True,
    }
    
    # Configuracion de pool solo para PostgreSQL
    if url.startswith("postgresql"):
        args.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_pre_ping": True,  # Verifica conexion antes de usar
            "isolation_level": settings.SYNC_ISOLATION_LEVEL,
        })
    
    return args


def create_db_engine(url: str) -> Engine:
    """Crea un engine para la URL indicada."""
    return create_engine(url, **_create_engine_args(url))


def get_engine() -> Engine:
    """Retorna el engine del proceso (se crea en el primer uso)."""
    global _engine
    if _engine is None:
        _engine = create_db_engine(settings.effective_database_url)
    return _engine


def init_db(engine: Optional[Engine] = None) -> None:
    """Inicializa la base de datos creando todas las tablas."""
    # Registrar modelos en Base.metadata
    from positions_sync.infrastructure.database import models  # noqa: F401

    engine = engine or get_engine()
    Base.metadata.create_all(engine)


def close_db() -> None:
    """Cierra las conexiones de la base de datos."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
