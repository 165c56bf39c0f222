"""
Guards aplicados antes de cada transicao da busca.

Todos devem permitir para a transicao acontecer; o primeiro que
negar define o motivo devolvido no TransitionResult.
"""

from collections.abc import Callable

from fsm.states.fetch import TERMINAL_STATES, FetchState


class GuardResult:
    """
    Resultado da avaliacao de um guard.

    Attributes:
        allowed: Se a transicao e permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        return cls(allowed=False, reason=reason)


Guard = Callable[[FetchState, FetchState], GuardResult]


def guard_valid_state(from_state: FetchState, to_state: FetchState) -> GuardResult:
    """Guard: ambos os estados precisam ser FetchState."""
    if not isinstance(from_state, FetchState):
        return GuardResult.deny(f"Estado de origem invalido: {from_state}")
    if not isinstance(to_state, FetchState):
        return GuardResult.deny(f"Estado de destino invalido: {to_state}")
    return GuardResult.allow()


def guard_terminal_state(from_state: FetchState, to_state: FetchState) -> GuardResult:
    """Guard: DONE e FAILED nao permitem saida."""
    del to_state
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Estado {from_state.name} e terminal, nao permite transicao"
        )
    return GuardResult.allow()


def guard_same_state(from_state: FetchState, to_state: FetchState) -> GuardResult:
    """Guard: apenas FETCHING pode transitar para si mesmo (proximo segmento)."""
    if from_state == to_state and from_state != FetchState.FETCHING:
        return GuardResult.deny(
            f"Transicao reflexiva nao permitida: {from_state.name} -> {to_state.name}"
        )
    return GuardResult.allow()


DEFAULT_GUARDS: list[Guard] = [
    guard_valid_state,
    guard_terminal_state,
    guard_same_state,
]


def evaluate_guards(
    from_state: FetchState,
    to_state: FetchState,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia os guards para uma transicao.

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state)
        if not result.allowed:
            return result

    return GuardResult.allow()
