"""
Tipos de dados para transicoes da busca.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.fetch import FetchState


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Registro imutavel de uma mudanca de estado.

    Attributes:
        from_state: Estado de origem
        to_state: Estado de destino
        trigger: Gatilho (ex: 'session_opened', 'segment_fetched')
        metadata: Dados para observabilidade (nunca o token)
        timestamp: Momento da transicao (UTC)
    """

    from_state: FetchState
    to_state: FetchState
    trigger: str
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.trigger or not self.trigger.strip():
            raise ValueError("trigger nao pode ser vazio")

    def to_log_dict(self) -> dict[str, Any]:
        return {
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "trigger": self.trigger,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Resultado de uma tentativa de transicao.

    Attributes:
        success: Se a transicao foi aplicada
        transition: Dados da transicao (se success=True)
        error_reason: Motivo da falha (se success=False)
    """

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transicao bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transicao falha deve incluir error_reason")
