"""
DTOs de la capa de aplicación.
"""
from positions_sync.application.dto.sync_dto import ExportResultDTO, SyncResultDTO

__all__ = ["ExportResultDTO", "SyncResultDTO"]
