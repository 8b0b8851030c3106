"""
Log de IDs gerados (append-only)
Uma linha por ID emitido - NUNCA é atualizada ou removida pelo gerador
"""
from sqlalchemy import Column, Integer, String, BigInteger, Index
from idlogic.models.base import Base, TimestampMixin, SoftDeleteMixin


class GeneratedId(Base, TimestampMixin, SoftDeleteMixin):
    """
    Registro de alocação de sequência.

    created_at guarda o instante efetivo da geração (inclusive datas
    informadas manualmente) e é usado para decidir reinícios por data.
    """
    __tablename__ = "sys_generated_ids"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    slug = Column(String(100), nullable=False)
    id_token = Column(String(255), nullable=False, default="")  # Agrupamento/reinício por token
    generated_code = Column(String(255), nullable=False)  # ID final formatado
    sequence_number = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<GeneratedId {self.generated_code}>"

    __table_args__ = (
        Index('idx_generated_ids_slug_token_id', 'slug', 'id_token', 'id'),
        Index('idx_generated_ids_slug_code', 'slug', 'generated_code'),
    )
