"""
Entidades de dominio: Position, PositionKey y Snapshot.

La identidad de una posición es su clave natural (depCode, depJob).
Esa identidad se modela como un tipo propio (PositionKey) y se usa como
clave de los mapas; description es solo carga útil.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from positions_sync.shared.exceptions.domain import DuplicateKeyException


@dataclass(frozen=True)
class PositionKey:
    """Clave natural de una posición."""

    dep_code: str
    dep_job: str

    def __str__(self) -> str:
        return f"{self.dep_code}:{self.dep_job}"


@dataclass(frozen=True)
class Position:
    """
    Registro de la tabla positions.

    - dep_code / dep_job: clave natural
    - description: texto libre, puede ser None (NULL en la tabla)
    """

    dep_code: str
    dep_job: str
    description: Optional[str] = None

    @property
    def key(self) -> PositionKey:
        return PositionKey(self.dep_code, self.dep_job)

    def as_row(self) -> Dict[str, Optional[str]]:
        """Dict listo para INSERT/UPDATE (claves = columnas del modelo)."""
        return {
            "dep_code": self.dep_code,
            "dep_job": self.dep_job,
            "description": self.description,
        }


class Snapshot:
    """
    Contenido de un archivo XML: mapa PositionKey -> Position.

    Se construye una vez por sync y se descarta al terminar la transacción.
    """

    def __init__(self) -> None:
        self._positions: Dict[PositionKey, Position] = {}

    def add(self, position: Position) -> None:
        """
        Agrega una posición.

        Raises:
            DuplicateKeyException: si la clave natural ya estaba presente.
        """
        key = position.key
        if key in self._positions:
            raise DuplicateKeyException(key)
        self._positions[key] = position

    def get(self, key: PositionKey) -> Optional[Position]:
        return self._positions.get(key)

    def rows(self) -> list[Dict[str, Optional[str]]]:
        return [p.as_row() for p in self._positions.values()]

    def __contains__(self, key: object) -> bool:
        return key in self._positions

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions.values())

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"<Snapshot(positions={len(self._positions)})>"
