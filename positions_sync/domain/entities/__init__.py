"""
Entidades de dominio.
"""
from positions_sync.domain.entities.position import Position, PositionKey, Snapshot

__all__ = ["Position", "PositionKey", "Snapshot"]
