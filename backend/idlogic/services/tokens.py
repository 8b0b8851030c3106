"""
Construção do id_token (identidade da "época" atual de uma sequência)

O token é gravado em todo ID gerado, independente do reset_type,
para que mudanças de token possam ser auditadas depois.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional


def date_parts(now: datetime) -> Dict[str, str]:
    """Partes da data usadas tanto no token quanto no formato"""
    return {
        "YYYY": now.strftime("%Y"),
        "YY": now.strftime("%y"),
        "MM": now.strftime("%m"),
        "DD": now.strftime("%d"),
    }


def stringify(value: Any) -> str:
    """Converte valor de data para texto (None vira vazio)"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_token(
    reset_keys: Optional[List[str]],
    data: Optional[Dict[str, Any]],
    now: datetime
) -> str:
    """
    Monta o id_token a partir de todos os campos de data + partes de data.

    A ordem dos campos é a ordem em que o chamador os enviou, portanto
    o chamador deve sempre enviar as chaves na mesma ordem.

    Args:
        reset_keys: Chaves de token_reset_logic (ex: ["YYYY", "MM"])
        data: Dados customizados enviados pelo chamador
        now: Data de referência da geração

    Returns:
        Token (ex: "ACME-2025-11")

    Usage:
        build_token(["YYYY"], {"CUSTOMER": "ACME"}, now)
        # Retorna: "ACME-2025"
    """
    parts: List[str] = []

    if data:
        for value in data.values():
            parts.append(stringify(value))

    if reset_keys:
        available = date_parts(now)
        for key in reset_keys:
            # Chaves desconhecidas não contribuem
            if key in available:
                parts.append(available[key])

    return "-".join(parts)
