"""
Rotas de Lógicas de ID - geração e administração
"""
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional
from idlogic.api.deps import get_db
from idlogic.exceptions import LogicNotFound, TransactionFailure, StorageFailure
from idlogic.models.id_logic import IdLogic
from idlogic.models.generated_id import GeneratedId
from idlogic.schemas.id_logic import (
    IdLogicCreate,
    IdLogicUpdate,
    IdLogicResponse,
    IdLogicListResponse,
    GeneratedIdListResponse,
    GenerateRequest,
    GenerateResponse,
)
from idlogic.services.id_logic_service import generate
from idlogic.api.utils import get_by_slug, validate_unique, paginate_response, apply_search_filter, update_entity

router = APIRouter()


@router.post("/generate", response_model=GenerateResponse, response_model_exclude_none=True)
def gerar_id(
    payload: GenerateRequest,
    db: Session = Depends(get_db)
):
    """
    Gerar ID(s) para uma lógica

    - multiple > 0 retorna lista em "codes"
    - caso contrário retorna "code"
    """
    try:
        result = generate(db, payload.slug, payload.data, payload.date, payload.multiple)
    except LogicNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TransactionFailure as e:
        # Seguro repetir a requisição inteira
        raise HTTPException(status_code=409, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if isinstance(result, list):
        return {"codes": result}
    return {"code": result}


@router.get("/", response_model=IdLogicListResponse)
def listar_logicas(
    page: int = Query(1, ge=1, description="Página"),
    page_size: int = Query(20, ge=1, le=100, description="Itens por página"),
    busca: Optional[str] = Query(None, description="Buscar por slug ou formato"),
    ativo: Optional[bool] = Query(None, description="Filtrar por ativo/inativo"),
    db: Session = Depends(get_db)
):
    """Listar lógicas com paginação e filtros"""
    query = db.query(IdLogic).filter(IdLogic.deleted_at.is_(None))

    if busca:
        query = apply_search_filter(query, busca, IdLogic.slug, IdLogic.format)
    if ativo is not None:
        query = query.filter(IdLogic.active.is_(ativo))

    return paginate_response(query, page, page_size, IdLogic.slug)


@router.post("/", response_model=IdLogicResponse, status_code=201)
def criar_logica(
    logic: IdLogicCreate,
    db: Session = Depends(get_db)
):
    """Criar nova lógica de ID"""
    validate_unique(db, IdLogic, "slug", logic.slug, display_name="Slug")

    db_logic = IdLogic(**logic.model_dump())
    db.add(db_logic)
    db.commit()
    db.refresh(db_logic)
    return db_logic


@router.get("/{slug}", response_model=IdLogicResponse)
def obter_logica(
    slug: str,
    db: Session = Depends(get_db)
):
    """Obter lógica (ativa ou inativa)"""
    return get_by_slug(db, IdLogic, slug, error_message="Lógica de ID não encontrada")


@router.put("/{slug}", response_model=IdLogicResponse)
def atualizar_logica(
    slug: str,
    logic_update: IdLogicUpdate,
    db: Session = Depends(get_db)
):
    """Atualizar lógica existente"""
    logic = get_by_slug(db, IdLogic, slug, error_message="Lógica de ID não encontrada")
    return update_entity(db, logic, logic_update)


@router.delete("/{slug}", status_code=204)
def deletar_logica(
    slug: str,
    db: Session = Depends(get_db)
):
    """Desativar lógica (soft delete - IDs já gerados são mantidos)"""
    logic = get_by_slug(db, IdLogic, slug, error_message="Lógica de ID não encontrada")

    logic.active = False
    logic.deleted_at = datetime.now()
    db.commit()
    return None


@router.get("/{slug}/generated", response_model=GeneratedIdListResponse)
def listar_ids_gerados(
    slug: str,
    page: int = Query(1, ge=1, description="Página"),
    page_size: int = Query(50, ge=1, le=500, description="Itens por página"),
    id_token: Optional[str] = Query(None, description="Filtrar por token"),
    db: Session = Depends(get_db)
):
    """Histórico de IDs gerados para a lógica (mais recentes primeiro)"""
    get_by_slug(db, IdLogic, slug, error_message="Lógica de ID não encontrada")

    query = db.query(GeneratedId).filter(
        GeneratedId.slug == slug,
        GeneratedId.deleted_at.is_(None)
    )
    if id_token is not None:
        query = query.filter(GeneratedId.id_token == id_token)

    return paginate_response(
        query, page, page_size,
        (GeneratedId.created_at.desc(), GeneratedId.id.desc())
    )
