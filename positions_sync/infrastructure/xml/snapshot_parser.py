"""
Parser del snapshot XML.

Reglas:
- el archivo debe existir (SnapshotFileNotFoundException)
- debe contener al menos un <position> (EmptySnapshotException)
- cada <position> debe tener depCode, depJob y description (MalformedEntryException)
- la clave natural (depCode, depJob) no puede repetirse: se corta en el
  primer duplicado (DuplicateKeyException), sin revisar las entradas siguientes

No toca la base de datos.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from lxml import etree

from positions_sync.domain.entities.position import Position, PositionKey, Snapshot
from positions_sync.infrastructure.xml.format import (
    DEP_CODE_TAG,
    DEP_JOB_TAG,
    DESCRIPTION_TAG,
    POSITION_TAG,
    XSI_NIL,
)
from positions_sync.shared.exceptions.domain import (
    DuplicateKeyException,
    EmptySnapshotException,
    MalformedDocumentException,
    MalformedEntryException,
    SnapshotException,
    SnapshotFileNotFoundException,
)


def _make_parser() -> etree.XMLParser:
    # Sin resolución de entidades ni acceso a red.
    return etree.XMLParser(resolve_entities=False, no_network=True)


def _field_text(entry: etree._Element, tag: str, index: int, *, nullable: bool = False) -> Optional[str]:
    """
    Texto del hijo directo <tag>. Un elemento vacío retorna "".
    Con nullable=True, xsi:nil="true" retorna None.
    """
    child = entry.find(tag)
    if child is None:
        raise MalformedEntryException(index, tag)
    if nullable and child.get(XSI_NIL) in ("true", "1"):
        return None
    return "".join(child.itertext())


def parse_snapshot(path: Union[str, Path]) -> Snapshot:
    """
    Lee el archivo XML y retorna el Snapshot (PositionKey -> Position).
    """
    path = Path(path)
    if not path.is_file():
        raise SnapshotFileNotFoundException(path)

    try:
        tree = etree.parse(str(path), _make_parser())
    except etree.XMLSyntaxError as e:
        raise MalformedDocumentException(path, str(e)) from e
    except OSError as e:
        raise SnapshotException(
            f"No se pudo leer el archivo {path}: {e}",
            error_code="READ_ERROR",
            details={"path": str(path)},
        ) from e

    entries = list(tree.getroot().iter(POSITION_TAG))
    if not entries:
        raise EmptySnapshotException(path)

    snapshot = Snapshot()
    for index, entry in enumerate(entries, start=1):
        dep_code = _field_text(entry, DEP_CODE_TAG, index)
        dep_job = _field_text(entry, DEP_JOB_TAG, index)

        key = PositionKey(dep_code, dep_job)
        if key in snapshot:
            raise DuplicateKeyException(key)

        description = _field_text(entry, DESCRIPTION_TAG, index, nullable=True)
        snapshot.add(Position(dep_code=dep_code, dep_job=dep_job, description=description))

    return snapshot
