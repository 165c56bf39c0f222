"""
Modulo FSM: maquina de estados da busca mensal de calendario.

Estrutura:
    - states/: Estados da busca (FetchState enum)
    - transitions/: Grafo de transicoes (VALID_TRANSITIONS)
    - rules/: Guards
    - manager/: Maquina de estados (FetchStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

from fsm.manager import (
    INITIAL_STATES,
    FetchStateMachine,
    create_fsm,
)
from fsm.rules import (
    GuardResult,
    evaluate_guards,
)
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    FetchState,
    is_terminal,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "INITIAL_STATES",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "FetchState",
    "FetchStateMachine",
    "GuardResult",
    "StateTransition",
    "TransitionResult",
    "create_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
    "validate_transition_map",
]
