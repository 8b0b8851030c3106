from sqlalchemy import Column, DateTime
from datetime import datetime
from idlogic.database import Base


class TimestampMixin:
    """
    Mixin para campos de auditoria temporal
    Todas as tabelas terão created_at e updated_at

    Horário local sem tzinfo, a mesma convenção das gerações de ID
    (sys_generated_ids.created_at guarda a data efetiva da geração)
    """
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)


class SoftDeleteMixin:
    """
    Suporta soft delete (deleted_at)
    Registros com deleted_at preenchido são ignorados pelo gerador
    """
    deleted_at = Column(DateTime, nullable=True)


# Base já foi definida em database.py
# Aqui apenas importamos e exportamos para facilitar
__all__ = ['Base', 'TimestampMixin', 'SoftDeleteMixin']
