"""
MicroFoxx / AsyncMicroFoxx: main SDK clients.
"""

import asyncio
import functools
import inspect
from typing import Any, Generator, Optional

from microfoxx.auth import SessionManager
from microfoxx.collections import CollectionsAPI
from microfoxx.cursors import CursorsAPI
from microfoxx.documents import DocumentsAPI
from microfoxx.errors import AuthError
from microfoxx.graphs import GraphsAPI
from microfoxx.indexes import IndexesAPI
from microfoxx.models.query import CursorQueryParams
from microfoxx.models.results import CursorQueryResult
from microfoxx.models.session import ConnectionParams, SessionInfo
from microfoxx.queries import QueriesAPI
from microfoxx.transport.http import DEFAULT_TIMEOUT, HttpClient, Sender


class AsyncMicroFoxx:
    """Async microfoxx client (primary).

    Call login() before anything else, and refresh() whenever the server
    rejects the session; neither happens automatically.
    """

    def __init__(
        self,
        params: Optional[ConnectionParams] = None,
        *,
        sender: Optional[Sender] = None,
        session: Optional[SessionInfo] = None,
        timeout: float = DEFAULT_TIMEOUT,
        **connection: Any,
    ):
        self._params = params or ConnectionParams(**connection)

        self.http = HttpClient(self._params, sender=sender, session=session, timeout=timeout)
        self.auth = SessionManager(self.http)
        self.cursors = CursorsAPI(self.http)
        self.collections = CollectionsAPI(self.http)
        self.documents = DocumentsAPI(self.http)
        self.graphs = GraphsAPI(self.http)
        self.indexes = IndexesAPI(self.http)
        self.queries = QueriesAPI(self.http)

    @property
    def params(self) -> ConnectionParams:
        return self._params

    @property
    def session(self) -> Optional[SessionInfo]:
        return self.http.session

    async def login(self, username: Optional[str] = None, password: Optional[str] = None) -> SessionInfo:
        """Establish a session, falling back to the credentials in params."""
        user = username if username is not None else self._params.username
        if not user:
            raise AuthError("username required. Pass it here or in ConnectionParams.")
        pwd = password if password is not None else self._params.password
        return await self.auth.establish(user, pwd)

    async def refresh(self) -> SessionInfo:
        """Replace the current session using the configured credentials."""
        if not self._params.username:
            raise AuthError("Cannot refresh without a username in ConnectionParams.")
        return await self.auth.refresh(self._params.username, self._params.password)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncMicroFoxx":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()


class _SyncAPI:
    """Blocking view of one async API object."""

    def __init__(self, target: Any, run: Any):
        self._target = target
        self._run = run

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._target, name)
        if inspect.isasyncgenfunction(attr):
            return self._iterate(attr)
        if not inspect.iscoroutinefunction(attr):
            return attr

        @functools.wraps(attr)
        def call(*args: Any, **kwargs: Any) -> Any:
            return self._run(attr(*args, **kwargs))
        return call

    def _iterate(self, attr: Any) -> Any:
        @functools.wraps(attr)
        def iterate(*args: Any, **kwargs: Any) -> Generator[Any, None, None]:
            agen = attr(*args, **kwargs)
            try:
                while True:
                    try:
                        item = self._run(agen.__anext__())
                    except StopAsyncIteration:
                        return
                    yield item
            finally:
                self._run(agen.aclose())
        return iterate


class MicroFoxx:
    """Sync wrapper around AsyncMicroFoxx. Runs the event loop internally."""

    def __init__(self, params: Optional[ConnectionParams] = None, **kwargs: Any):
        self._async = AsyncMicroFoxx(params, **kwargs)
        self._loop = asyncio.new_event_loop()

        self.auth = _SyncAPI(self._async.auth, self._run)
        self.cursors = _SyncAPI(self._async.cursors, self._run)
        self.collections = _SyncAPI(self._async.collections, self._run)
        self.documents = _SyncAPI(self._async.documents, self._run)
        self.graphs = _SyncAPI(self._async.graphs, self._run)
        self.indexes = _SyncAPI(self._async.indexes, self._run)
        self.queries = _SyncAPI(self._async.queries, self._run)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def params(self) -> ConnectionParams:
        return self._async.params

    @property
    def session(self) -> Optional[SessionInfo]:
        return self._async.session

    def login(self, username: Optional[str] = None, password: Optional[str] = None) -> SessionInfo:
        return self._run(self._async.login(username, password))

    def refresh(self) -> SessionInfo:
        return self._run(self._async.refresh())

    def iter_batches(self, params: CursorQueryParams) -> Generator[CursorQueryResult, None, None]:
        """Blocking counterpart of ``cursors.batches()``."""
        yield from self.cursors.batches(params)

    def close(self) -> None:
        if self._loop.is_closed():
            return
        self._run(self._async.close())
        self._loop.close()

    def __enter__(self) -> "MicroFoxx":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
