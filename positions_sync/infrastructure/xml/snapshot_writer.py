"""
Serializador del snapshot XML (export).

Volcado puro: sin estado y sin lógica de conflictos.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from lxml import etree

from positions_sync.domain.entities.position import Position
from positions_sync.infrastructure.xml.format import (
    DEP_CODE_TAG,
    DEP_JOB_TAG,
    DESCRIPTION_TAG,
    POSITION_TAG,
    ROOT_TAG,
    XSI_NAMESPACE,
    XSI_NIL,
)
from positions_sync.shared.exceptions.domain import (
    DirectoryCreationException,
    ExportWriteException,
)


def build_document(positions: Iterable[Position]) -> etree._ElementTree:
    """
    Construye el documento <positions> con un <position> por fila.
    """
    root = etree.Element(ROOT_TAG, nsmap={"xsi": XSI_NAMESPACE})
    for position in positions:
        node = etree.SubElement(root, POSITION_TAG)
        etree.SubElement(node, DEP_CODE_TAG).text = position.dep_code
        etree.SubElement(node, DEP_JOB_TAG).text = position.dep_job
        description = etree.SubElement(node, DESCRIPTION_TAG)
        if position.description is None:
            description.set(XSI_NIL, "true")
        else:
            description.text = position.description
    return etree.ElementTree(root)


def ensure_parent_directory(path: Path) -> None:
    """
    Crea el directorio destino si no existe.

    Raises:
        DirectoryCreationException: si no se puede crear.
    """
    directory = path.parent
    if directory.is_dir():
        return
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationException(directory, str(e)) from e


def write_snapshot(positions: Iterable[Position], path: Union[str, Path]) -> int:
    """
    Escribe el XML en disco (UTF-8, con declaración, indentado).

    Returns:
        Cantidad de <position> escritos.
    """
    path = Path(path)
    positions = list(positions)
    ensure_parent_directory(path)

    try:
        payload = etree.tostring(
            build_document(positions),
            encoding="UTF-8",
            xml_declaration=True,
            pretty_print=True,
        )
    except ValueError as e:
        # lxml rechaza caracteres no válidos en XML (p.ej. controles)
        raise ExportWriteException(path, str(e)) from e

    try:
        path.write_bytes(payload)
    except OSError as e:
        raise ExportWriteException(path, str(e)) from e

    return len(positions)
