"""
Decide se a sequência reinicia, comparando a geração atual com a anterior
"""
from datetime import datetime
from typing import Union

from idlogic.models.id_logic import ResetType


def should_reset(
    reset_type: Union[ResetType, str],
    previous_created_at: datetime,
    now: datetime,
    current_token: str,
    previous_token: str
) -> bool:
    """
    Só é chamada quando já existe uma geração anterior para o slug/token.

    Reinícios por data comparam o instante atual com o created_at da
    geração anterior (não com o token), assim dados customizados no token
    nunca interferem em reinícios de calendário.
    """
    reset_type = ResetType(reset_type)

    if reset_type == ResetType.NONE:
        return False
    if reset_type == ResetType.YEARLY:
        return now.year != previous_created_at.year
    if reset_type == ResetType.MONTHLY:
        return (
            now.year != previous_created_at.year
            or now.month != previous_created_at.month
        )
    if reset_type == ResetType.DAILY:
        return now.date() != previous_created_at.date()

    # Reinício por token
    return current_token != previous_token
