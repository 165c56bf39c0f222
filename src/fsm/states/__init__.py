"""
Exports publicos do modulo fsm/states.

Estados canonicos da busca mensal.
"""

from fsm.states.fetch import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    FetchState,
    is_terminal,
    is_valid_state,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "FetchState",
    "is_terminal",
    "is_valid_state",
]
