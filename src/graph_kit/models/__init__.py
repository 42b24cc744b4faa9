"""Data models for graph-kit."""

from .call import Call, HTTPComponent, RawResponse
from .config import GraphConfig

__all__ = [
    "Call",
    "GraphConfig",
    "HTTPComponent",
    "RawResponse",
]
