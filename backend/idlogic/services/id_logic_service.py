"""
Gerador de IDs - alocação de sequências por lógica (slug)

IMPORTANTE: Cada geração é uma unidade atômica. A linha da lógica fica travada
durante toda a geração, então dois pedidos para o mesmo slug são serializados
(slugs diferentes nunca se bloqueiam). Nenhum código é devolvido sem o registro
correspondente em sys_generated_ids já commitado.

Se algo falhar, a transação é desfeita por inteiro e o erro vai para o chamador.
Buracos na sequência após um rollback são aceitáveis; duplicados nunca.
"""
import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from idlogic.config import settings
from idlogic.exceptions import IdLogicError, LogicNotFound, StorageFailure, TransactionFailure
from idlogic.models.generated_id import GeneratedId
from idlogic.models.id_logic import IdLogic
from idlogic.services.renderer import render_code
from idlogic.services.reset_policy import should_reset
from idlogic.services.tokens import build_token

logger = logging.getLogger(__name__)

# serialization_failure, deadlock_detected, lock_not_available
TRANSACTION_SQLSTATES = {"40001", "40P01", "55P03"}

DateInput = Union[None, str, date, datetime]


class _VersionConflict(Exception):
    """Outro gerador alterou lock_version entre a leitura e a gravação"""


def resolve_now(value: DateInput = None) -> datetime:
    """
    Normaliza a data de referência da geração.

    Aceita None (relógio atual), datetime, date ou string ISO-8601.
    Datas com timezone são convertidas para o horário local sem tzinfo,
    a mesma convenção usada para gravar created_at.

    Raises:
        ValueError se a string não for uma data ISO válida
    """
    if value is None:
        return datetime.now()
    if isinstance(value, str):
        value = value.strip()
        # fromisoformat só aceita "Z" a partir do Python 3.11
        if value.endswith(("Z", "z")):
            value = value[:-1] + "+00:00"
        value = datetime.fromisoformat(value)
    elif not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def find_logic(db: Session, slug: str, lock: bool = False) -> IdLogic:
    """
    Busca a lógica ativa pelo slug.

    Args:
        db: Sessão do banco
        slug: Slug da lógica
        lock: Se True, trava a linha (SELECT ... FOR UPDATE) até o fim da transação

    Raises:
        LogicNotFound se não existir lógica ativa com esse slug
    """
    query = db.query(IdLogic).filter(
        IdLogic.slug == slug,
        IdLogic.active.is_(True),
        IdLogic.deleted_at.is_(None)
    )
    if lock:
        query = query.with_for_update()

    logic = query.first()
    if not logic:
        raise LogicNotFound(slug)
    return logic


def _lock_strategy(db: Session) -> str:
    strategy = settings.ID_LOCK_STRATEGY
    if strategy != "auto":
        return strategy
    # SQLite ignora FOR UPDATE
    return "version" if db.get_bind().dialect.name == "sqlite" else "row_lock"


def _last_generated(db: Session, slug: str, token: str) -> Optional[GeneratedId]:
    """
    Última geração do slug para o token, na ordem de alocação.

    Ordena pelo id (ordem em que o banco serializou as gerações sob o lock),
    nunca por created_at: datas retroativas não podem esconder a última geração.
    """
    return db.query(GeneratedId).filter(
        GeneratedId.slug == slug,
        GeneratedId.id_token == token,
        GeneratedId.deleted_at.is_(None)
    ).order_by(
        GeneratedId.id.desc(),
        GeneratedId.sequence_number.desc()
    ).first()


def _claim_version(db: Session, logic: IdLogic) -> bool:
    """Compare-and-swap em lock_version; False se outro gerador chegou antes"""
    updated = db.query(IdLogic).filter(
        IdLogic.id == logic.id,
        IdLogic.lock_version == logic.lock_version
    ).update(
        {IdLogic.lock_version: IdLogic.lock_version + 1},
        synchronize_session=False
    )
    return updated == 1


def _is_transaction_error(err: SQLAlchemyError) -> bool:
    orig = getattr(err, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code in TRANSACTION_SQLSTATES:
        return True
    return "database is locked" in str(orig or err).lower()


def _translate_error(err: SQLAlchemyError, committing: bool = False) -> IdLogicError:
    """Converte erro do SQLAlchemy em TransactionFailure ou StorageFailure"""
    if isinstance(err, DBAPIError) and err.connection_invalidated:
        return StorageFailure(f"Banco de dados indisponível: {err}")
    if committing or _is_transaction_error(err):
        return TransactionFailure(f"Falha na transação: {err}")
    return StorageFailure(f"Falha no banco de dados: {err}")


def _allocate_once(
    db: Session,
    slug: str,
    data: Optional[Dict[str, Any]],
    now: Optional[datetime]
) -> str:
    strategy = _lock_strategy(db)
    committing = False

    try:
        logic = find_logic(db, slug, lock=(strategy == "row_lock"))

        # Relógio lido depois do lock, na mesma ordem das gerações
        if now is None:
            now = resolve_now()

        token = build_token(logic.reset_keys, data, now)
        last = _last_generated(db, slug, token)

        next_number = logic.starting_id
        if last:
            if should_reset(logic.reset_type, last.created_at, now, token, last.id_token):
                logger.info(f"[ID LOGIC] Sequência reiniciada para '{slug}' (token '{token}')")
            else:
                next_number = last.sequence_number + 1

        code = render_code(logic.format, data, now, next_number, logic.pad_length)

        if strategy == "version" and not _claim_version(db, logic):
            raise _VersionConflict(slug)

        db.add(GeneratedId(
            slug=slug,
            id_token=token,
            generated_code=code,
            sequence_number=next_number,
            created_at=now,
            updated_at=now
        ))
        db.flush()

        committing = True
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        error = _translate_error(e, committing)
        logger.warning(f"[ID LOGIC] Erro ao gerar ID para '{slug}': {error}")
        raise error from e
    except BaseException:
        # Inclui cancelamento: a transação nunca fica pendente
        db.rollback()
        raise

    logger.debug(f"[ID LOGIC] {slug}: {code} (token '{token}', sequência {next_number})")
    return code


def allocate(
    db: Session,
    slug: str,
    data: Optional[Dict[str, Any]] = None,
    now: DateInput = None
) -> str:
    """
    Gera um único ID para a lógica.

    Args:
        db: Sessão do banco (a geração faz commit/rollback nela)
        slug: Slug da lógica
        data: Dados customizados para o formato e para o token
        now: Data de referência (default: agora, lido dentro da transação)

    Returns:
        Código formatado (ex: "EMP-2025-11-00001")

    Raises:
        LogicNotFound, TransactionFailure, StorageFailure

    Usage:
        code = allocate(db, "employee", {"PREFIX": "EMP"})
    """
    if now is not None:
        now = resolve_now(now)

    attempts = max(1, settings.ID_CAS_MAX_RETRIES)
    for attempt in range(1, attempts + 1):
        try:
            return _allocate_once(db, slug, data, now)
        except _VersionConflict:
            logger.info(f"[ID LOGIC] Conflito de versão em '{slug}' (tentativa {attempt}/{attempts})")

    raise TransactionFailure(f"Conflito persistente ao gerar ID para '{slug}' após {attempts} tentativas")


def allocate_many(
    db: Session,
    slug: str,
    data: Optional[Dict[str, Any]] = None,
    now: DateInput = None,
    count: int = 1
) -> List[str]:
    """
    Gera vários IDs, um commit por ID.

    Token e lock são reavaliados a cada ID, então uma virada de período no
    meio do lote aparece nos IDs seguintes. Se o ID k falhar, os IDs 1..k-1
    continuam gravados e o erro é propagado.
    """
    if count < 1:
        raise ValueError("count deve ser >= 1")

    codes: List[str] = []
    for _ in range(count):
        codes.append(allocate(db, slug, data, now))
    return codes


def generate(
    db: Session,
    slug: str,
    data: Optional[Dict[str, Any]] = None,
    date: DateInput = None,
    multiple: Optional[int] = None
) -> Union[str, List[str]]:
    """
    Ponto de entrada para chamadores.

    Returns:
        Código único, ou lista de códigos quando multiple > 0

    Usage:
        generate(db, "invoice", {"BRANCH": "SP"})
        # Retorna: "INV-SP-2025-00001"

        generate(db, "invoice", {"BRANCH": "SP"}, multiple=3)
        # Retorna: ["INV-SP-2025-00002", "INV-SP-2025-00003", "INV-SP-2025-00004"]
    """
    if multiple and multiple > 0:
        return allocate_many(db, slug, data, date, multiple)
    return allocate(db, slug, data, date)
