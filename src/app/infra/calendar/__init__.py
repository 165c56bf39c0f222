"""Implementacao HTTP do client de sessao com o upstream."""

from app.infra.calendar.upstream_session_client import (
    UpstreamSessionClient,
    create_upstream_session_client,
)

__all__ = [
    "UpstreamSessionClient",
    "create_upstream_session_client",
]
