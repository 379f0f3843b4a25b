"""
microfoxx: Python client for microfoxx document-database services.

REST client for a Foxx service in front of an ArangoDB database:
documents, collections, graphs, indexes and batched cursor queries.
"""

from microfoxx.client import MicroFoxx, AsyncMicroFoxx
from microfoxx.auth import SessionManager
from microfoxx.cursors import CursorsAPI
from microfoxx.errors import (
    MicroFoxxError,
    ErrorKind,
    AuthError,
    BadRequestError,
    NotFoundError,
    GeneralError,
    TransportError,
    DecodeError,
)
from microfoxx.models.graph import Graph, Relation
from microfoxx.models.index import Index, IndexParams
from microfoxx.models.document import DocumentRetrievalParams
from microfoxx.models.payload import JsonPayload
from microfoxx.models.query import CursorQueryParams, ModifyingQueryParams
from microfoxx.models.results import CursorQueryResult, CursorState, OperationResult
from microfoxx.models.session import ConnectionParams, SessionInfo

__version__ = "0.1.0"
__all__ = [
    "MicroFoxx",
    "AsyncMicroFoxx",
    "SessionManager",
    "CursorsAPI",
    "MicroFoxxError",
    "ErrorKind",
    "AuthError",
    "BadRequestError",
    "NotFoundError",
    "GeneralError",
    "TransportError",
    "DecodeError",
    "Graph",
    "Relation",
    "Index",
    "IndexParams",
    "DocumentRetrievalParams",
    "JsonPayload",
    "CursorQueryParams",
    "ModifyingQueryParams",
    "CursorQueryResult",
    "CursorState",
    "OperationResult",
    "ConnectionParams",
    "SessionInfo",
]
