"""
Renderização do código final a partir do formato da lógica
"""
import re
from datetime import datetime
from typing import Any, Dict, Optional

from idlogic.services.tokens import date_parts, stringify

DATE_PLACEHOLDER = re.compile(r"\{(YYYY|YY|MM|DD)\}")
DATA_PLACEHOLDER = re.compile(r"\{([^{}#][^{}]*)\}")
SEQUENCE_PLACEHOLDER = re.compile(r"\{#+\}")
REPEATED_DASHES = re.compile(r"--+")
EDGE_DASH = re.compile(r"^-|-$")


def render_code(
    fmt: str,
    data: Optional[Dict[str, Any]],
    now: datetime,
    sequence_number: int,
    pad_width: int
) -> str:
    """
    Gera o código formatado.

    A ordem das substituições importa:
    1. Datas ({YYYY}, {YY}, {MM}, {DD})
    2. Campos de data ({CHAVE}); placeholders sem valor viram vazio
    3. Sequência ({###}) com zeros à esquerda até pad_width
       (a quantidade de # no formato é apenas visual)
    4. Hífens repetidos viram um só; remove hífen no início/fim

    Usage:
        render_code("{PREFIX}-{YYYY}-{MM}-{#####}", {"PREFIX": "EMP"}, now, 1, 5)
        # Retorna: "EMP-2025-11-00001"
    """
    parts = date_parts(now)
    code = DATE_PLACEHOLDER.sub(lambda m: parts[m.group(1)], fmt)

    values = data or {}
    code = DATA_PLACEHOLDER.sub(lambda m: stringify(values.get(m.group(1))), code)

    padded = str(sequence_number).zfill(pad_width or 0)
    code = SEQUENCE_PLACEHOLDER.sub(lambda m: padded, code)

    code = REPEATED_DASHES.sub("-", code)
    return EDGE_DASH.sub("", code)
