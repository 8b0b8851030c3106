"""
Pagination Helpers - Funções utilitárias para paginação e filtros
"""
from typing import TypeVar, Any, Optional, Tuple, List
from sqlalchemy.orm import Query
from sqlalchemy import or_

T = TypeVar('T')


def paginate_query(
    query: Query,
    page: int = 1,
    page_size: int = 20,
    order_by: Any = None
) -> Tuple[List[T], int]:
    """
    Aplica paginação em uma query e retorna itens + total.

    Args:
        query: Query SQLAlchemy
        page: Número da página (1-indexed)
        page_size: Tamanho da página
        order_by: Coluna(s) para ordenação - pode ser único ou tupla

    Returns:
        Tupla (lista_de_itens, total)

    Usage:
        items, total = paginate_query(query, page=1, page_size=20, order_by=IdLogic.slug)
        items, total = paginate_query(query, 1, 50, (GeneratedId.created_at.desc(), GeneratedId.id.desc()))
    """
    total = query.count()

    if order_by is not None:
        if isinstance(order_by, tuple):
            query = query.order_by(*order_by)
        else:
            query = query.order_by(order_by)

    items = query.offset((page - 1) * page_size).limit(page_size).all()

    return items, total


def paginate_response(
    query: Query,
    page: int = 1,
    page_size: int = 20,
    order_by: Any = None
) -> dict:
    """
    Aplica paginação e retorna dict pronto para response.

    Usage:
        return paginate_response(query, page, page_size, IdLogic.slug)
    """
    items, total = paginate_query(query, page, page_size, order_by)

    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size
    }


def apply_search_filter(
    query: Query,
    search_term: Optional[str],
    *fields
) -> Query:
    """
    Aplica filtro de busca ILIKE em múltiplos campos.

    Usage:
        query = apply_search_filter(query, busca, IdLogic.slug, IdLogic.format)
    """
    if not search_term or not fields:
        return query

    conditions = [field.ilike(f"%{search_term}%") for field in fields]
    return query.filter(or_(*conditions))
