"""
Exports publicos do modulo fsm/manager.
"""

from fsm.manager.machine import (
    INITIAL_STATES,
    FetchStateMachine,
    create_fsm,
)

__all__ = [
    "INITIAL_STATES",
    "FetchStateMachine",
    "create_fsm",
]
