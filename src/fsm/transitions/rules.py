"""
Regras de transicao validas entre estados da busca.

Grafo: IDLE -> SESSION_OPENING -> FETCHING(n) -> AGGREGATING -> DONE,
com FAILED alcancavel de qualquer estado nao-terminal.
"""

from fsm.states.fetch import TERMINAL_STATES, FetchState

TransitionMap = dict[FetchState, frozenset[FetchState]]

VALID_TRANSITIONS: TransitionMap = {
    # IDLE: token rejeitado falha direto, sem IO
    FetchState.IDLE: frozenset({
        FetchState.SESSION_OPENING,
        FetchState.FAILED,
    }),

    FetchState.SESSION_OPENING: frozenset({
        FetchState.FETCHING,
        FetchState.FAILED,
    }),

    # FETCHING: loop por segmento ate o fim da paginacao
    FetchState.FETCHING: frozenset({
        FetchState.FETCHING,
        FetchState.AGGREGATING,
        FetchState.FAILED,
    }),

    FetchState.AGGREGATING: frozenset({
        FetchState.DONE,
        FetchState.FAILED,
    }),

    FetchState.DONE: frozenset(),
    FetchState.FAILED: frozenset(),
}


def get_valid_targets(state: FetchState) -> frozenset[FetchState]:
    """Retorna os estados de destino validos (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: FetchState, to_state: FetchState) -> bool:
    """Verifica se uma transicao e permitida pelo grafo."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transicoes.

    Returns:
        Lista de erros encontrados (vazia se valido)
    """
    errors: list[str] = []

    for state in FetchState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} nao deveria ter transicoes: {targets}"
            )

    for from_state, targets in VALID_TRANSITIONS.items():
        if from_state not in TERMINAL_STATES and FetchState.FAILED not in targets:
            errors.append(f"Estado {from_state.name} sem caminho para FAILED")

    return errors
