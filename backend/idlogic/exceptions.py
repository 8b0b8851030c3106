"""
Exceções do gerador de IDs

Três tipos de falha, distinguíveis pelo chamador:
- LogicNotFound: slug inexistente ou inativo (fatal, não repetir)
- TransactionFailure: timeout de lock, conflito, falha no commit (seguro repetir)
- StorageFailure: banco inacessível/corrompido (fatal)
"""


class IdLogicError(Exception):
    """Base para erros do gerador"""


class LogicNotFound(IdLogicError):
    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f'No ID logic found for slug "{slug}"')


class TransactionFailure(IdLogicError):
    """Falha transacional - a alocação inteira pode ser repetida"""

    retryable = True


class StorageFailure(IdLogicError):
    """Falha do armazenamento - reportada como está"""

    retryable = False
