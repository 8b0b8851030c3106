from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional, Union
from datetime import datetime
from idlogic.models.id_logic import ResetType

# Valores aceitos em "data": apenas tipos primitivos, usados só em interpolação
DataValue = Union[str, int, float, bool, None]


def _normalize_reset_keys(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    keys = [key.strip() for key in v.split(",") if key.strip()]
    return ",".join(keys) or None


class IdLogicBase(BaseModel):
    """Schema base para lógica de ID"""
    format: str = Field(..., min_length=1, max_length=255, description="Formato, ex: {PREFIX}-{YYYY}-{#####}")
    reset_type: ResetType = Field(ResetType.NONE, description="none, yearly, monthly, daily ou token")
    token_reset_logic: Optional[str] = Field(None, max_length=255, description="Chaves separadas por vírgula, ex: YYYY,MM")
    next_number: int = Field(1, ge=0)
    starting_id: int = Field(1, ge=0, description="Número usado no início de cada período")
    pad_length: int = Field(5, ge=0, le=50, description="Quantidade mínima de dígitos da sequência")
    active: bool = True

    @field_validator("token_reset_logic")
    @classmethod
    def normalize_reset_keys(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_reset_keys(v)


class IdLogicCreate(IdLogicBase):
    """Schema para criação de lógica"""
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[A-Za-z0-9_.-]+$")


class IdLogicUpdate(BaseModel):
    """Schema para atualização de lógica (campos opcionais)"""
    format: Optional[str] = Field(None, min_length=1, max_length=255)
    reset_type: Optional[ResetType] = None
    token_reset_logic: Optional[str] = Field(None, max_length=255)
    next_number: Optional[int] = Field(None, ge=0)
    starting_id: Optional[int] = Field(None, ge=0)
    pad_length: Optional[int] = Field(None, ge=0, le=50)
    active: Optional[bool] = None

    @field_validator("token_reset_logic")
    @classmethod
    def normalize_reset_keys(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_reset_keys(v)


class IdLogicResponse(IdLogicBase):
    """Schema para resposta da API"""
    id: int
    slug: str
    reset_keys: List[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class IdLogicListResponse(BaseModel):
    """Schema para listagem paginada"""
    total: int
    page: int
    page_size: int
    items: list[IdLogicResponse]


class GeneratedIdResponse(BaseModel):
    id: int
    slug: str
    id_token: str
    generated_code: str
    sequence_number: int
    created_at: datetime

    class Config:
        from_attributes = True


class GeneratedIdListResponse(BaseModel):
    total: int
    page: int
    page_size: int
    items: list[GeneratedIdResponse]


class GenerateRequest(BaseModel):
    """Pedido de geração de ID(s)"""
    slug: str = Field(..., min_length=1, max_length=100)
    data: Optional[Dict[str, DataValue]] = Field(None, description="Campos para o formato e para o token")
    date: Optional[str] = Field(None, description="Data ISO-8601 para gerar com data específica")
    multiple: Optional[int] = Field(None, ge=0, le=1000, description="Quantidade de IDs (gera lista)")


class GenerateResponse(BaseModel):
    code: Optional[str] = None
    codes: Optional[List[str]] = None
