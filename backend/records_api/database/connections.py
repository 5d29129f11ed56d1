"""
MongoDB connection management.

One PersistenceClient owns the process' connection to MongoDB. It connects
with a bounded server selection timeout, retries failed attempts forever with
a fixed delay, and reconnects when the connection drops. While it is not
connected every repository call fails fast with PersistenceUnavailableError.
"""
import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import ConnectionFailure, PyMongoError

from records_api.config import Settings
from records_api.core.exceptions import ConfigurationError, PersistenceUnavailableError
from records_api.database.databases import records_db

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Any]
ConnectHook = Callable[[AsyncIOMotorDatabase], Awaitable[None]]


class ConnectionState(str, Enum):
    """Lifecycle of the MongoDB connection."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class PersistenceClient:
    """Owns the MongoDB client and keeps it connected."""

    def __init__(
        self,
        uri: Optional[str],
        database_name: str = records_db.DB_NAME,
        *,
        server_selection_timeout_ms: int = 5000,
        reconnect_delay_seconds: float = 5.0,
        heartbeat_interval_seconds: float = 10.0,
        client_factory: ClientFactory = AsyncIOMotorClient,
    ):
        self.uri = uri
        self.database_name = database_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.reconnect_delay_seconds = reconnect_delay_seconds
        self.heartbeat_interval_seconds = heartbeat_interval_seconds
        self._client_factory = client_factory

        self._client: Optional[Any] = None
        self._state = ConnectionState.DISCONNECTED
        self._connected = asyncio.Event()
        self._closed = True
        self._reconnect_task: Optional[asyncio.Task] = None
        self._monitor_task: Optional[asyncio.Task] = None
        self._on_connect: list[ConnectHook] = []

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "PersistenceClient":
        """Build a client from application settings."""
        return cls(
            settings.mongodb_uri,
            settings.mongodb_database,
            server_selection_timeout_ms=settings.mongo_server_selection_timeout_ms,
            reconnect_delay_seconds=settings.mongo_reconnect_delay_seconds,
            heartbeat_interval_seconds=settings.mongo_heartbeat_interval_seconds,
            **kwargs,
        )

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state == ConnectionState.CONNECTED

    @property
    def reconnect_pending(self) -> bool:
        """True while a reconnect loop is scheduled or running."""
        return self._reconnect_task is not None and not self._reconnect_task.done()

    def add_connect_hook(self, hook: ConnectHook) -> None:
        """Register a coroutine run against the database after every successful connect."""
        self._on_connect.append(hook)

    # ==================== Lifecycle ====================

    async def start(self) -> None:
        """
        Connect for the first time and start watching the connection.

        A failed first attempt is not fatal: it is logged and the retry loop
        takes over in the background.

        Raises:
            ConfigurationError: If no connection URI is configured
        """
        if not self.uri:
            raise ConfigurationError("MONGODB_URI is not defined in environment variables")

        self._closed = False
        try:
            await self.connect()
        except PyMongoError as e:
            self._log_retry(e)
            self._schedule_reconnect(delay_first=True)

        self._monitor_task = asyncio.create_task(self._monitor())

    async def connect(self) -> None:
        """
        Make a single connection attempt.

        Raises:
            PyMongoError: If the server cannot be reached within the
                server selection timeout or an on-connect hook fails
        """
        self._set_state(ConnectionState.CONNECTING)
        client = None
        try:
            # Construction can fail too, e.g. an unresolvable mongodb+srv host
            client = self._client_factory(
                self.uri,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                tz_aware=True,
            )
            await client.admin.command("ping")
            db = client[self.database_name]
            for hook in self._on_connect:
                await hook(db)
        except PyMongoError:
            if client is not None:
                client.close()
            self._set_state(ConnectionState.DISCONNECTED)
            raise

        self._client = client
        self._set_state(ConnectionState.CONNECTED)
        logger.info("Connected to MongoDB (database=%s)", self.database_name)

    async def close(self) -> None:
        """Stop reconnecting and close the MongoDB client."""
        self._closed = True
        for task in (self._reconnect_task, self._monitor_task):
            if task is not None and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._reconnect_task = None
        self._monitor_task = None
        self._drop_client()
        logger.info("MongoDB connection closed")

    async def wait_until_connected(self, timeout: Optional[float] = None) -> None:
        """
        Block until the client is connected.

        Raises:
            asyncio.TimeoutError: If not connected within ``timeout`` seconds
        """
        await asyncio.wait_for(self._connected.wait(), timeout)

    async def ping(self) -> bool:
        """Round-trip to the server. Returns False when not connected or unreachable."""
        if not self.is_connected:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            self.report_failure(e)
            return False
        return True

    # ==================== Connection events ====================

    def handle_error(self, error: BaseException) -> None:
        """Connection-level error: log it and carry on."""
        logger.error("MongoDB connection error: %s", error)

    def handle_disconnect(self) -> None:
        """Connection dropped: discard the client and re-run the connect routine."""
        if self._closed:
            return
        if self._state == ConnectionState.CONNECTED:
            logger.warning("MongoDB disconnected. Attempting to reconnect...")
            self._drop_client()
        self._schedule_reconnect(delay_first=False)

    def report_failure(self, error: PyMongoError) -> None:
        """Called by repositories when a driver operation fails."""
        self.handle_error(error)
        if isinstance(error, ConnectionFailure):
            self.handle_disconnect()

    # ==================== Handles ====================

    @property
    def database(self) -> AsyncIOMotorDatabase:
        """
        The application database.

        Raises:
            PersistenceUnavailableError: If not currently connected
        """
        if not self.is_connected:
            raise PersistenceUnavailableError(
                f"MongoDB connection is {self._state.value}"
            )
        return self._client[self.database_name]

    def collection(self, name: str) -> AsyncIOMotorCollection:
        """Get a collection from the application database."""
        return self.database[name]

    # ==================== Internals ====================

    def _set_state(self, state: ConnectionState) -> None:
        self._state = state
        if state == ConnectionState.CONNECTED:
            self._connected.set()
        else:
            self._connected.clear()

    def _drop_client(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
        self._set_state(ConnectionState.DISCONNECTED)

    def _log_retry(self, error: BaseException) -> None:
        logger.error("MongoDB connection error: %s", error)
        logger.info("Retrying connection in %s seconds...", self.reconnect_delay_seconds)

    def _schedule_reconnect(self, delay_first: bool) -> None:
        if self.reconnect_pending:
            return
        self._reconnect_task = asyncio.create_task(self._reconnect_loop(delay_first))

    async def _reconnect_loop(self, delay_first: bool) -> None:
        if delay_first:
            await asyncio.sleep(self.reconnect_delay_seconds)
        while not self._closed:
            try:
                await self.connect()
                return
            except PyMongoError as e:
                self._log_retry(e)
                await asyncio.sleep(self.reconnect_delay_seconds)

    async def _monitor(self) -> None:
        """Heartbeat: ping while connected and raise the disconnect event on failure."""
        while not self._closed:
            await asyncio.sleep(self.heartbeat_interval_seconds)
            if not self.is_connected:
                continue
            try:
                await self._client.admin.command("ping")
            except PyMongoError as e:
                self.handle_error(e)
                self.handle_disconnect()
