"""
HTTP transport for the Neo4j transactional endpoint.

One ``submit()`` call is one transaction: all statements are posted in a
single request to ``/db/data/transaction/commit`` and either all commit or
the server rolls all of them back. Results come back positionally, one per
statement.

No retries: a failed transaction is atomic, so the caller decides whether
to resubmit.
"""

import logging
from collections.abc import Sequence

import httpx

from ..errors import TransactionError
from ..models.query import QueryUnit
from ..models.responses import StatementResult, TransactionResponse

logger = logging.getLogger(__name__)


def parse_auth(auth: str) -> httpx.BasicAuth:
    """Build basic auth from a ``"<username>:<password>"`` string."""
    username, sep, password = auth.partition(":")
    if not sep:
        raise ValueError("You must supply credentials as '<username>:<password>'")
    return httpx.BasicAuth(username, password)


class Neo4jTransport:
    """
    Async client for batched Cypher statements over HTTP.

    The underlying ``httpx.AsyncClient`` holds a connection pool; create one
    transport per process and share it.
    """

    def __init__(
        self,
        url: str = "http://localhost:7474",
        auth: str | None = None,
        transaction_path: str = "/db/data/transaction/commit",
        timeout: float = 30.0,
        max_connections: int = 16,
    ):
        self.url = url.rstrip("/")
        self.auth = auth
        self.transaction_path = transaction_path
        self.timeout = timeout
        self.max_connections = max_connections

        self._client: httpx.AsyncClient | None = None
        self._initialized = False

    async def initialize(self) -> None:
        """Create the pooled HTTP client."""
        if self._initialized:
            return

        self._client = httpx.AsyncClient(
            base_url=self.url,
            auth=parse_auth(self.auth) if self.auth else None,
            timeout=self.timeout,
            limits=httpx.Limits(max_connections=self.max_connections),
            headers={"Accept": "application/json; charset=UTF-8"},
        )
        self._initialized = True
        logger.info(f"Neo4jTransport initialized: {self.url}{self.transaction_path}")

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("Neo4jTransport not initialized. Call initialize() first.")
        return self._client

    async def submit(self, units: Sequence[QueryUnit]) -> list[StatementResult]:
        """
        Run ``units`` as one transaction.

        Returns:
            One StatementResult per unit, in the same order.

        Raises:
            TransactionError: If the server reports statement errors.
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.TransportError: On connection failures and timeouts.
        """
        if not units:
            logger.debug("No statements to submit")
            return []

        payload = {"statements": [unit.as_statement() for unit in units]}
        response = await self.client.post(self.transaction_path, json=payload)
        response.raise_for_status()

        body = TransactionResponse.model_validate(response.json())
        if body.errors:
            logger.error(f"Transaction of {len(units)} statement(s) failed: {body.errors[0].code}")
            raise TransactionError(body.errors)

        logger.debug(f"Committed {len(units)} statement(s)")
        return body.results

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            try:
                await self._client.aclose()
                logger.info("Neo4jTransport client closed")
            except Exception as e:
                logger.warning(f"Error closing Neo4jTransport client: {e}")
            finally:
                self._client = None
                self._initialized = False
