"""
Tests unitarios para el serializador XML (export).
"""
import pytest
from lxml import etree

from positions_sync.domain.entities.position import Position, PositionKey
from positions_sync.infrastructure.xml.snapshot_parser import parse_snapshot
from positions_sync.infrastructure.xml.snapshot_writer import build_document, write_snapshot
from positions_sync.shared.exceptions.domain import (
    DirectoryCreationException,
    ExportWriteException,
)


def test_build_document_structure() -> None:
    tree = build_document([Position("D1", "Clerk", "Old")])
    root = tree.getroot()

    assert root.tag == "positions"
    position = root.find("position")
    assert [child.tag for child in position] == ["depCode", "depJob", "description"]
    assert position.findtext("depCode") == "D1"
    assert position.findtext("depJob") == "Clerk"
    assert position.findtext("description") == "Old"


def test_write_creates_missing_directory(tmp_path) -> None:
    target = tmp_path / "nested" / "deeper" / "export.xml"

    written = write_snapshot([Position("D1", "Clerk", "Old")], target)

    assert written == 1
    assert target.is_file()
    content = target.read_bytes()
    assert content.startswith(b"<?xml version='1.0' encoding='UTF-8'?>")


def test_write_empty_table_produces_root_only(tmp_path) -> None:
    target = tmp_path / "export.xml"

    assert write_snapshot([], target) == 0

    root = etree.parse(str(target)).getroot()
    assert root.tag == "positions"
    assert len(root) == 0


def test_null_and_empty_descriptions_survive_parse(tmp_path) -> None:
    target = tmp_path / "export.xml"
    write_snapshot(
        [Position("D1", "Clerk", None), Position("D2", "Manager", "")],
        target,
    )

    snapshot = parse_snapshot(target)

    assert snapshot.get(PositionKey("D1", "Clerk")).description is None
    assert snapshot.get(PositionKey("D2", "Manager")).description == ""


def test_special_characters_are_escaped(tmp_path) -> None:
    target = tmp_path / "export.xml"
    write_snapshot([Position("D&1", "<Clerk>", 'says "hi" & bye')], target)

    snapshot = parse_snapshot(target)

    assert snapshot.get(PositionKey("D&1", "<Clerk>")).description == 'says "hi" & bye'


def test_parent_is_a_file_raises_directory_creation(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(DirectoryCreationException) as exc_info:
        write_snapshot([Position("D1", "Clerk", "Old")], blocker / "sub" / "export.xml")

    assert exc_info.value.error_code == "DIRECTORY_CREATION_ERROR"


def test_target_is_a_directory_raises_write_error(tmp_path) -> None:
    target = tmp_path / "is_a_dir"
    target.mkdir()

    with pytest.raises(ExportWriteException) as exc_info:
        write_snapshot([Position("D1", "Clerk", "Old")], target)

    assert exc_info.value.error_code == "WRITE_ERROR"


def test_invalid_xml_characters_raise_write_error(tmp_path) -> None:
    with pytest.raises(ExportWriteException):
        write_snapshot([Position("D1", "Clerk", "bad\x00value")], tmp_path / "export.xml")
