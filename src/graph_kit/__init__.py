"""graph-kit: A Python client for object/graph-style HTTP APIs.

This package provides typed access to a Graph API's objects and
connections, including:
- Reading, writing and deleting objects and connections
- Lazy, cursor-based pagination over connections
- Batching many calls into a single request
- Photo and video uploads from paths, file handles, bytes or URLs
- Typed error classification
"""

from .__version__ import __version__
from .client import BatchOperation, GraphAPI, GraphBatchAPI
from .collection import GraphCollection
from .config_factory import ConfigFactory, create_config, load_config
from .exceptions import (
    ArgumentError,
    BatchScopeError,
    ConfigurationError,
    ConnectionError,
    ErrorKind,
    GraphAPIError,
    GraphError,
    MissingAccessTokenError,
    NoSuchPageError,
    RemoteAPIError,
    TimeoutError,
    TransportError,
)
from .models import Call, GraphConfig, HTTPComponent, RawResponse
from .operations.streaming import stream_collection
from .protocols import ByteSource, Transport
from .transport import HTTPXTransport
from .uploadable_io import UploadableIO

__all__ = [
    "__version__",
    # Clients
    "GraphAPI",
    "GraphBatchAPI",
    "BatchOperation",
    # Configuration
    "GraphConfig",
    "ConfigFactory",
    "create_config",
    "load_config",
    # Requests and results
    "Call",
    "RawResponse",
    "HTTPComponent",
    "GraphCollection",
    "UploadableIO",
    # Streaming
    "stream_collection",
    # Protocols (for dependency injection)
    "Transport",
    "ByteSource",
    "HTTPXTransport",
    # Exceptions
    "ErrorKind",
    "GraphError",
    "GraphAPIError",
    "RemoteAPIError",
    "MissingAccessTokenError",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
    "ArgumentError",
    "NoSuchPageError",
    "BatchScopeError",
    "ConfigurationError",
]
