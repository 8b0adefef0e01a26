"""
CLI: export / sync de la tabla positions.

Uso:
  positions-sync -c export -f ./data/export.xml
  positions-sync -c sync -f ./data/import.xml
  python -m positions_sync -c sync            (usa IMPORT_FILE_PATH)

Opciones:
  -c, --command  Comando: 'export' o 'sync'
  -f, --file     Ruta al archivo XML (por defecto EXPORT_FILE_PATH / IMPORT_FILE_PATH)
  -h, --help     Muestra la ayuda

Códigos de salida:
  0 operación completada
  1 error de datos, de archivo o de base de datos
  2 error de uso (comando faltante/desconocido, ruta no configurada)
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from loguru import logger
from sqlalchemy.engine import Engine

from positions_sync.application.use_cases.export_use_cases import PositionExportUseCases
from positions_sync.application.use_cases.sync_use_cases import PositionSyncUseCases
from positions_sync.core.config import Settings, settings
from positions_sync.core.logging import configure_logging
from positions_sync.infrastructure.database.session import close_db, get_engine
from positions_sync.shared.exceptions.base import AppException


EXIT_OK = 0
EXIT_USAGE = 2

COMMAND_EXPORT = "export"
COMMAND_SYNC = "sync"
COMMANDS = (COMMAND_EXPORT, COMMAND_SYNC)


def build_parser(app_settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="positions-sync",
        description="Exporta la tabla positions a XML o la sincroniza desde un XML.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"{app_settings.APP_NAME} {app_settings.APP_VERSION}",
    )
    parser.add_argument("-c", "--command", help="Comando: 'export' o 'sync'")
    parser.add_argument("-f", "--file", help="Ruta al archivo XML")
    return parser


def _default_path(command: str, app_settings: Settings) -> str:
    if command == COMMAND_EXPORT:
        return app_settings.EXPORT_FILE_PATH
    return app_settings.IMPORT_FILE_PATH


def _usage_error(parser: argparse.ArgumentParser, message: str) -> int:
    logger.error(message)
    print(f"Error: {message}", file=sys.stderr)
    parser.print_help(sys.stderr)
    return EXIT_USAGE


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    engine: Optional[Engine] = None,
    app_settings: Optional[Settings] = None,
) -> int:
    app_settings = app_settings or settings
    parser = build_parser(app_settings)
    args = parser.parse_args(argv)

    configure_logging(app_settings)

    if not args.command:
        return _usage_error(parser, "es necesario indicar un comando (-c)")

    command = args.command.lower()
    if command not in COMMANDS:
        return _usage_error(parser, f"comando desconocido: {command}")

    file_path = args.file or _default_path(command, app_settings)
    if not file_path:
        setting_name = "EXPORT_FILE_PATH" if command == COMMAND_EXPORT else "IMPORT_FILE_PATH"
        return _usage_error(
            parser,
            f"ruta no indicada: use -f o configure {setting_name}",
        )

    owns_engine = engine is None
    if owns_engine:
        engine = get_engine()

    try:
        if command == COMMAND_EXPORT:
            result = PositionExportUseCases(engine).export(file_path)
            logger.info(f"Exportación completada: {result.path}")
        else:
            result = PositionSyncUseCases(
                engine,
                upsert_strategy=app_settings.SYNC_UPSERT_STRATEGY,
            ).sync(file_path)
            logger.info(f"Sincronización completada: {result.path}")
    except AppException as e:
        logger.error(f"{e.error_code}: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return e.exit_code
    except Exception:
        logger.exception(f"Error inesperado ejecutando '{command}'")
        raise
    finally:
        if owns_engine:
            close_db()

    print("Operación completada.")
    return EXIT_OK


def run() -> None:
    """Entry point del console script."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
