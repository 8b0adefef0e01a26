from positions_sync.application.use_cases.export_use_cases import PositionExportUseCases
from positions_sync.application.use_cases.sync_use_cases import PositionSyncUseCases

__all__ = ["PositionExportUseCases", "PositionSyncUseCases"]
