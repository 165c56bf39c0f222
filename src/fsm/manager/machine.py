"""
Maquina de estados (FetchStateMachine) de uma busca mensal.

Uma instancia por chamada de fetch_month; nunca compartilhada entre
requisicoes, por isso nao ha lock.
"""

from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.fetch import (
    DEFAULT_INITIAL_STATE,
    FetchState,
    is_terminal,
)
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class FetchStateMachine:
    """
    Maquina de estados da busca mensal.

    Valida transicoes contra o grafo e os guards e guarda o historico
    para diagnostico.

    Attributes:
        current_state: Estado atual da maquina
        history: Historico de transicoes realizadas
        segment_index: Indice do segmento corrente (0 antes do primeiro)
    """

    __slots__ = ("_current_state", "_fetch_id", "_history", "_segment_index")

    def __init__(
        self,
        initial_state: FetchState | None = None,
        fetch_id: str = "",
    ) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._fetch_id = fetch_id
        self._segment_index = 0

    @property
    def current_state(self) -> FetchState:
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Historico de transicoes (copia para evitar mutacao externa)."""
        return list(self._history)

    @property
    def fetch_id(self) -> str:
        return self._fetch_id

    @property
    def segment_index(self) -> int:
        return self._segment_index

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._current_state)

    def can_transition_to(self, target: FetchState) -> bool:
        """Verifica se pode transitar para o estado alvo."""
        if not is_transition_valid(self._current_state, target):
            return False
        return evaluate_guards(self._current_state, target).allowed

    def get_valid_targets(self) -> frozenset[FetchState]:
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: FetchState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transicao de estado.

        Entrar em FETCHING incrementa segment_index; o indice vai no
        metadata da transicao.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho (ex: 'session_opened')
            metadata: Dados adicionais para observabilidade (nunca o token)

        Returns:
            TransitionResult com sucesso/falha e dados da transicao
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transicao invalida: {self._current_state.name} -> {target.name}"
                ),
            )

        guard_result: GuardResult = evaluate_guards(self._current_state, target)
        if not guard_result.allowed:
            return TransitionResult(success=False, error_reason=guard_result.reason)

        details = dict(metadata or {})
        if target == FetchState.FETCHING:
            self._segment_index += 1
            details["segment_index"] = self._segment_index

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=details,
        )

        self._current_state = target
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo do estado atual, seguro para logs."""
        return {
            "fetch_id": self._fetch_id,
            "current_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "segment_index": self._segment_index,
            "transition_count": len(self._history),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        return [t.to_log_dict() for t in self._history]


def create_fsm(fetch_id: str) -> FetchStateMachine:
    """Factory para criar a FSM de uma busca."""
    return FetchStateMachine(fetch_id=fetch_id)


INITIAL_STATES = frozenset({DEFAULT_INITIAL_STATE})
