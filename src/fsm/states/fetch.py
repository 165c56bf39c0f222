"""
Estados canonicos de uma busca mensal de calendario.

Cada chamada a CalendarFetcher.fetch_month percorre estes estados
em ordem; DONE e FAILED encerram a busca.
"""

from enum import StrEnum


class FetchState(StrEnum):
    """
    Estados de uma busca mensal.

    Estados nao-terminais:
        - IDLE: Busca criada, token ainda nao validado
        - SESSION_OPENING: Handshake com o upstream em andamento
        - FETCHING: Buscando segmentos (um por pagina)
        - AGGREGATING: Normalizando o buffer agregado

    Estados terminais:
        - DONE: Resposta de sucesso produzida
        - FAILED: Resposta de erro produzida
    """

    IDLE = "IDLE"
    SESSION_OPENING = "SESSION_OPENING"
    FETCHING = "FETCHING"
    AGGREGATING = "AGGREGATING"

    DONE = "DONE"
    FAILED = "FAILED"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[FetchState] = frozenset({
    FetchState.DONE,
    FetchState.FAILED,
})

DEFAULT_INITIAL_STATE: FetchState = FetchState.IDLE


def is_terminal(state: FetchState) -> bool:
    """Verifica se o estado encerra a busca."""
    return state in TERMINAL_STATES


def is_valid_state(state: FetchState) -> bool:
    """Verifica se o valor e um FetchState valido."""
    return isinstance(state, FetchState)
