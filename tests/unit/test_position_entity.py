"""
Tests unitarios para las entidades Position, PositionKey y Snapshot.
"""
import pytest

from positions_sync.domain.entities.position import Position, PositionKey, Snapshot
from positions_sync.shared.exceptions.domain import DuplicateKeyException


def test_key_ignores_description() -> None:
    a = Position("D1", "Clerk", "Old")
    b = Position("D1", "Clerk", "New")

    assert a.key == b.key
    assert a != b  # la igualdad de Position incluye description


def test_key_str_uses_code_and_job() -> None:
    assert str(PositionKey("D1", "Clerk")) == "D1:Clerk"


def test_as_row_uses_model_column_keys() -> None:
    assert Position("D1", "Clerk", None).as_row() == {
        "dep_code": "D1",
        "dep_job": "Clerk",
        "description": None,
    }


def test_snapshot_add_and_lookup() -> None:
    snapshot = Snapshot()
    snapshot.add(Position("D1", "Clerk", "Old"))
    snapshot.add(Position("D2", "Manager", "Mgr"))

    assert len(snapshot) == 2
    assert PositionKey("D1", "Clerk") in snapshot
    assert snapshot.get(PositionKey("D2", "Manager")).description == "Mgr"
    assert {p.dep_code for p in snapshot} == {"D1", "D2"}


def test_snapshot_rejects_duplicate_key() -> None:
    snapshot = Snapshot()
    snapshot.add(Position("D1", "Clerk", "Old"))

    with pytest.raises(DuplicateKeyException) as exc_info:
        snapshot.add(Position("D1", "Clerk", "Other"))

    assert exc_info.value.key == PositionKey("D1", "Clerk")
    assert exc_info.value.error_code == "DUPLICATE_KEY"
    assert len(snapshot) == 1


def test_same_code_different_job_are_distinct() -> None:
    snapshot = Snapshot()
    snapshot.add(Position("D1", "Clerk", None))
    snapshot.add(Position("D1", "Manager", None))

    assert len(snapshot) == 2
