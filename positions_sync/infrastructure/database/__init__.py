"""
Configuración de base de datos.

Importa los modelos para que se registren con Base
antes de crear las tablas.
"""
from positions_sync.infrastructure.database.models import PositionModel
