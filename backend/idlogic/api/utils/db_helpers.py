"""
Database Helpers - Funções utilitárias para operações de banco de dados
"""
from typing import Type, TypeVar, Optional, Any
from sqlalchemy.orm import Session
from fastapi import HTTPException

T = TypeVar('T')


def get_by_slug(
    db: Session,
    model: Type[T],
    slug: str,
    raise_not_found: bool = True,
    error_message: str = None
) -> Optional[T]:
    """
    Busca entidade pelo slug, ignorando registros com soft delete.

    Args:
        db: Sessão do banco de dados
        model: Classe do modelo SQLAlchemy (precisa de slug e deleted_at)
        slug: Slug da entidade
        raise_not_found: Se True, levanta HTTPException 404 quando não encontrado
        error_message: Mensagem customizada de erro (opcional)

    Returns:
        Entidade encontrada ou None

    Usage:
        logic = get_by_slug(db, IdLogic, "employee")
    """
    entity = db.query(model).filter(
        model.slug == slug,
        model.deleted_at.is_(None)
    ).first()

    if not entity and raise_not_found:
        msg = error_message or f"{model.__name__} não encontrado"
        raise HTTPException(status_code=404, detail=msg)

    return entity


def validate_unique(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
    exclude_id: int = None,
    display_name: str = None
) -> None:
    """
    Valida unicidade de campo.

    Considera também registros com soft delete, já que a constraint
    do banco continua valendo para eles.

    Raises:
        HTTPException 409 se valor já existir

    Usage:
        validate_unique(db, IdLogic, "slug", payload.slug, display_name="Slug")
    """
    field = getattr(model, field_name)
    query = db.query(model).filter(field == field_value)

    if exclude_id:
        query = query.filter(model.id != exclude_id)

    if query.first():
        name = display_name or field_name
        raise HTTPException(status_code=409, detail=f"{name} já cadastrado")
