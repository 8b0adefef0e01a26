"""
Script para inicializar la base de datos (crea la tabla positions).

En producción el esquema lo gestiona el equipo de BD; este script es
para entornos de desarrollo.
"""
from loguru import logger

from positions_sync.infrastructure.database.session import close_db, init_db


def main():
    """Función principal para inicializar la base de datos."""
    logger.info("Inicializando base de datos...")
    
    try:
        init_db()
        logger.success("Base de datos inicializada correctamente")
    except Exception as e:
        logger.error(f"Error al inicializar base de datos: {e}")
        raise
    finally:
        close_db()


if __name__ == "__main__":
    main()
