"""Validacao do token do caller antes de qualquer IO."""

from __future__ import annotations

from dataclasses import dataclass

MISSING_CREDENTIAL = "missing credential"
MALFORMED_CREDENTIAL = "malformed credential"

DEFAULT_MAX_TOKEN_LENGTH = 4096


@dataclass(frozen=True, slots=True)
class TokenValidation:
    """Resultado da validacao: ok ou motivo da rejeicao."""

    ok: bool
    reason: str | None = None


def validate_token(
    token: str | None,
    *,
    max_length: int = DEFAULT_MAX_TOKEN_LENGTH,
) -> TokenValidation:
    """Valida presenca e forma do token (sem side effects).

    Vazio ou so espaco -> "missing credential". Espaco interno, caractere
    de controle ou tamanho acima de `max_length` -> "malformed credential".
    """
    if token is None or not token.strip():
        return TokenValidation(ok=False, reason=MISSING_CREDENTIAL)
    candidate = token.strip()
    if len(candidate) > max_length:
        return TokenValidation(ok=False, reason=MALFORMED_CREDENTIAL)
    if any(ch.isspace() or not ch.isprintable() for ch in candidate):
        return TokenValidation(ok=False, reason=MALFORMED_CREDENTIAL)
    return TokenValidation(ok=True)


def extract_bearer_token(header_value: str | None, scheme: str = "Bearer") -> str:
    """Remove o prefixo de esquema do header Authorization.

    Comparacao do esquema e case-insensitive; sem prefixo, devolve o
    valor inteiro (aparado).
    """
    if not header_value:
        return ""
    value = header_value.strip()
    if scheme:
        head, _, rest = value.partition(" ")
        if head.lower() == scheme.lower():
            return rest.strip()
    return value
