"""Graph API clients."""

from .base import BaseGraphClient
from .batch import BatchOperation, GraphBatchAPI
from .graph_api import GraphAPI
from .methods import GraphAPIMethods

__all__ = [
    "BaseGraphClient",
    "BatchOperation",
    "GraphAPI",
    "GraphAPIMethods",
    "GraphBatchAPI",
]
