"""
Modelos de base de datos (ORM).
"""
from sqlalchemy import Column, Integer, String, UniqueConstraint

from positions_sync.infrastructure.database.session import Base


DEP_CODE_LENGTH = 20
DEP_JOB_LENGTH = 100
DESCRIPTION_LENGTH = 255


class PositionModel(Base):
    """
    Modelo de base de datos para la tabla positions.
    
    El id es un surrogate que nunca se usa para comparar:
    la identidad es la clave natural (depcode, depjob).
    """
    
    __tablename__ = "positions"
    __table_args__ = (
        UniqueConstraint("dep_code", "dep_job", name="uq_positions_natural_key"),
    )
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    dep_code = Column("depcode", String(DEP_CODE_LENGTH), key="dep_code", nullable=False)
    dep_job = Column("depjob", String(DEP_JOB_LENGTH), key="dep_job", nullable=False)
    description = Column("description", String(DESCRIPTION_LENGTH), nullable=True)
    
    def __repr__(self):
        return f"<Position(id={self.id}, dep_code={self.dep_code}, dep_job={self.dep_job})>"
