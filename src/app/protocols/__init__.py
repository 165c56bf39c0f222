"""Protocolos e contratos do core da aplicacao."""

from .fetch_observer import FetchObserverProtocol
from .upstream_session import UpstreamSessionProtocol

__all__ = [
    "FetchObserverProtocol",
    "UpstreamSessionProtocol",
]
