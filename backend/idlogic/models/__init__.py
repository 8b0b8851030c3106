"""
Models do gerador de IDs

IMPORTANTE: sys_generated_ids é append-only. O gerador apenas insere linhas;
limpeza administrativa usa deleted_at (soft delete)
"""

from idlogic.models.base import Base, TimestampMixin, SoftDeleteMixin
from idlogic.models.id_logic import IdLogic, ResetType
from idlogic.models.generated_id import GeneratedId

__all__ = [
    "Base",
    "TimestampMixin",
    "SoftDeleteMixin",
    "IdLogic",
    "ResetType",
    "GeneratedId",
]
