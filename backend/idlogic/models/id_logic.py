"""
Modelo de lógica de geração de IDs
Cada lógica (slug) define o formato, a sequência e quando ela reinicia
"""
from sqlalchemy import Column, Integer, String, Boolean, BigInteger, Enum as SQLEnum
from idlogic.models.base import Base, TimestampMixin, SoftDeleteMixin
import enum


class ResetType(str, enum.Enum):
    """Política de reinício da sequência"""
    NONE = "none"
    YEARLY = "yearly"
    MONTHLY = "monthly"
    DAILY = "daily"
    TOKEN = "token"  # Reinicia quando o id_token muda (ex: por cliente, por filial)


class IdLogic(Base, TimestampMixin, SoftDeleteMixin):
    """
    Definição de uma família de IDs.

    Exemplo:
        slug="employee", format="{PREFIX}-{YYYY}-{MM}-{#####}",
        reset_type=monthly -> EMP-2025-11-00001, EMP-2025-11-00002, EMP-2025-12-00001

    Placeholders aceitos no formato:
    - {YYYY}, {YY}, {MM}, {DD}: partes da data
    - {CHAVE}: qualquer campo enviado em "data"
    - {#...#}: sequência (largura definida por pad_length)
    """
    __tablename__ = "sys_unique_id_logics"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    format = Column(String(255), nullable=False)

    reset_type = Column(
        SQLEnum(ResetType, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        default=ResetType.NONE,
        nullable=False
    )
    token_reset_logic = Column(String(255), nullable=True)  # Separado por vírgula, ex: "YYYY,MM"

    next_number = Column(Integer, default=1, nullable=False)
    starting_id = Column(Integer, default=1, nullable=False)
    pad_length = Column(Integer, default=5, nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    # Contador usado somente pela estratégia de travamento "version" (compare-and-swap)
    lock_version = Column(Integer, default=0, nullable=False)

    @property
    def reset_keys(self) -> list[str]:
        """Lista ordenada de chaves de token_reset_logic"""
        if not self.token_reset_logic:
            return []
        return [key.strip() for key in self.token_reset_logic.split(",") if key.strip()]

    def __repr__(self):
        return f"<IdLogic {self.slug}>"
