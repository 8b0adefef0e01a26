"""
DTOs para los resultados de export y sync.
"""
from pydantic import BaseModel, Field


class SyncResultDTO(BaseModel):
    """
    Resultado de una sincronización aplicada (ya commiteada).

    Una segunda corrida con el mismo archivo retorna
    inserted = updated = deleted = 0.
    """
    
    path: str = Field(..., description="Archivo XML sincronizado")
    snapshot_size: int = Field(..., description="Posiciones distintas en el XML")
    inserted: int = Field(0, description="Filas nuevas")
    updated: int = Field(0, description="Filas con description modificada")
    deleted: int = Field(0, description="Filas eliminadas por no estar en el XML")
    unchanged: int = Field(0, description="Filas del XML que ya estaban iguales")

    @property
    def changed(self) -> bool:
        return bool(self.inserted or self.updated or self.deleted)


class ExportResultDTO(BaseModel):
    """Resultado de un export."""
    
    path: str = Field(..., description="Archivo XML generado")
    exported: int = Field(0, description="Filas escritas")
