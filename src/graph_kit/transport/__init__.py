"""HTTP transports for graph-kit."""

from .httpx_transport import HTTPXTransport

__all__ = ["HTTPXTransport"]
