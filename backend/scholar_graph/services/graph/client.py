"""
Neo4j Graph Client

Owns the process-wide async driver and provides the session discipline used
by every service: one short-lived session per operation, always closed.

The client is created once in the application lifespan, stored on
app.state, handed to services through FastAPI dependencies, and closed on
shutdown.

Usage:
    from scholar_graph.services.graph import Neo4jClient

    client = Neo4jClient.from_settings(settings)
    await client.connect()

    rows = await client.run_query("MATCH (n:Usuario) RETURN n LIMIT $limit", {"limit": 5})
    row = await client.run_single("MATCH (n:Usuario {id: $id}) RETURN n", {"id": 1})

    await client.close()
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional, TypeVar

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession, AsyncTransaction

from scholar_graph.config.settings import Settings
from scholar_graph.services.graph.queries import PING
from scholar_graph.services.graph.utils import record_to_dict

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Neo4jClient:
    """
    Client for Neo4j graph operations.

    Wraps a single AsyncDriver. Query helpers return plain dicts (nodes and
    relationships already reduced to their properties) so services never
    handle driver types directly.

    Attributes:
        uri: Bolt/neo4j URI of the database
        database: Target database name (None for the server default)
    """

    def __init__(
        self,
        uri: str,
        user: str,
        password: str,
        database: Optional[str] = None,
    ):
        self.uri = uri
        self.database = database or None
        self._auth = (user, password)
        self._driver: Optional[AsyncDriver] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Neo4jClient":
        """Build a client from application settings."""
        return cls(
            settings.NEO4J_URI,
            settings.NEO4J_USER,
            settings.NEO4J_PASSWORD,
            settings.NEO4J_DATABASE,
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def connect(self) -> None:
        """Create the driver. Safe to call more than once."""
        if self._driver is not None:
            return
        try:
            self._driver = AsyncGraphDatabase.driver(self.uri, auth=self._auth)
            logger.info(f"Neo4j client connected to {self.uri}")
        except Exception as e:
            logger.error(f"Failed to connect to Neo4j: {e}")
            raise

    async def close(self) -> None:
        """Close the driver and release its connection pool."""
        if self._driver is not None:
            await self._driver.close()
            self._driver = None
            logger.info("Neo4j client closed")

    @property
    def driver(self) -> AsyncDriver:
        """The underlying driver; raises if connect() was not called."""
        if self._driver is None:
            raise RuntimeError("Neo4j client is not connected")
        return self._driver

    async def verify_connectivity(self) -> bool:
        """
        Verify Neo4j connectivity.

        Returns:
            True if a trivial query succeeds, False otherwise
        """
        try:
            row = await self.run_single(PING)
            return bool(row and row.get("ok") == 1)
        except Exception as e:
            logger.error(f"Neo4j connectivity check failed: {e}")
            return False

    # =========================================================================
    # Query Helpers
    # =========================================================================

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Async context manager for a session on the target database.

        The session is closed when the context exits, on success or error.

        Example:
            async with client.session() as session:
                result = await session.run(query, params)
        """
        async with self.driver.session(database=self.database) as session:
            yield session

    async def run_query(
        self, cypher: str, params: Optional[dict[str, Any]] = None
    ) -> list[dict[str, Any]]:
        """
        Execute a Cypher query and return all records as plain dicts.

        Args:
            cypher: The Cypher query string to execute.
            params: Bound parameters. Passed as a dict so property keys
                never collide with driver keyword arguments.

        Returns:
            List of dictionaries, one per result record.
        """
        async with self.session() as session:
            result = await session.run(cypher, params or {})
            return [record_to_dict(record) async for record in result]

    async def run_single(
        self, cypher: str, params: Optional[dict[str, Any]] = None
    ) -> Optional[dict[str, Any]]:
        """
        Execute a Cypher query and return its first record.

        Returns:
            First record as a plain dict, or None if there are no records.
        """
        rows = await self.run_query(cypher, params)
        return rows[0] if rows else None

    async def execute_write(
        self,
        work: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Run `work(tx, *args, **kwargs)` inside an explicit write transaction.

        Statements issued by `work` commit together. A failure rolls the
        transaction back and propagates; nothing is retried.
        """
        async with self.session() as session:
            tx = await session.begin_transaction()
            try:
                result = await work(tx, *args, **kwargs)
                await tx.commit()
                return result
            finally:
                # Rolls back if commit was not reached; no-op after commit
                await tx.close()


async def fetch_single(
    tx: AsyncTransaction, cypher: str, params: Optional[dict[str, Any]] = None
) -> Optional[dict[str, Any]]:
    """Run a statement inside a transaction and return its first record."""
    result = await tx.run(cypher, params or {})
    record = await result.single()
    return record_to_dict(record) if record else None
