"""
Unit tests for Neo4jTransport.

The HTTP client is mocked; responses are real httpx.Response objects so
status handling and JSON decoding behave as they do on the wire.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from neo4j_kb.errors import TransactionError
from neo4j_kb.graph.transport import Neo4jTransport, parse_auth
from neo4j_kb.models.query import QueryUnit

COMMIT_URL = "http://localhost:7474/db/data/transaction/commit"


def _response(status_code=200, body=None):
    return httpx.Response(status_code, json=body or {}, request=httpx.Request("POST", COMMIT_URL))


def _transport_with(response):
    """A transport whose client returns ``response`` from post()."""
    transport = Neo4jTransport(auth="neo4j:secret")
    transport._client = MagicMock()
    transport._client.post = AsyncMock(return_value=response)
    transport._initialized = True
    return transport


class TestParseAuth:
    def test_basic_auth(self):
        assert isinstance(parse_auth("neo4j:secret"), httpx.BasicAuth)

    def test_password_may_contain_colon(self):
        auth = parse_auth("neo4j:se:cret")
        request = next(auth.auth_flow(httpx.Request("GET", COMMIT_URL)))
        expected = httpx.BasicAuth("neo4j", "se:cret")
        assert request.headers["Authorization"] == next(
            expected.auth_flow(httpx.Request("GET", COMMIT_URL))
        ).headers["Authorization"]

    def test_missing_separator(self):
        with pytest.raises(ValueError, match="username"):
            parse_auth("neo4j")


class TestTransportInit:
    """Client creation and lifecycle."""

    @pytest.mark.asyncio
    @patch("neo4j_kb.graph.transport.httpx.AsyncClient")
    async def test_initialize_creates_client(self, mock_client_cls):
        transport = Neo4jTransport(url="http://db:7474/", auth="neo4j:secret", timeout=5.0, max_connections=4)
        await transport.initialize()

        mock_client_cls.assert_called_once()
        kwargs = mock_client_cls.call_args.kwargs
        assert kwargs["base_url"] == "http://db:7474"
        assert kwargs["timeout"] == 5.0
        assert isinstance(kwargs["auth"], httpx.BasicAuth)
        assert transport.client is mock_client_cls.return_value

        # Idempotent
        await transport.initialize()
        mock_client_cls.assert_called_once()

    @pytest.mark.asyncio
    @patch("neo4j_kb.graph.transport.httpx.AsyncClient")
    async def test_initialize_without_auth(self, mock_client_cls):
        await Neo4jTransport().initialize()
        assert mock_client_cls.call_args.kwargs["auth"] is None

    def test_client_before_initialize_raises(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            Neo4jTransport().client

    @pytest.mark.asyncio
    async def test_close_cleans_up(self):
        transport = _transport_with(_response())
        client = transport._client
        client.aclose = AsyncMock()

        await transport.close()

        client.aclose.assert_called_once()
        assert transport._client is None
        assert transport._initialized is False

    @pytest.mark.asyncio
    async def test_close_when_not_initialized(self):
        await Neo4jTransport().close()  # Should not raise

    @pytest.mark.asyncio
    async def test_close_error_is_logged(self):
        transport = _transport_with(_response())
        transport._client.aclose = AsyncMock(side_effect=RuntimeError("boom"))

        await transport.close()

        assert transport._client is None


class TestTransportSubmit:
    """One submit() call is one transaction request."""

    @pytest.mark.asyncio
    async def test_posts_all_statements_in_one_request(self):
        body = {
            "results": [
                {"columns": ["u"], "data": [{"row": [{"name": "A"}], "meta": [None]}]},
                {"columns": ["u"], "data": []},
            ],
            "errors": [],
        }
        transport = _transport_with(_response(body=body))
        units = [
            QueryUnit("MATCH (u:alpha {name: {prop}.name}) RETURN u", {"prop": {"name": "A"}}),
            QueryUnit("MATCH (u:beta) RETURN u"),
        ]

        results = await transport.submit(units)

        transport._client.post.assert_called_once()
        path = transport._client.post.call_args.args[0]
        payload = transport._client.post.call_args.kwargs["json"]
        assert path == "/db/data/transaction/commit"
        assert payload == {"statements": [unit.as_statement() for unit in units]}
        assert payload["statements"][0]["parameters"] == {"prop": {"name": "A"}}

        assert len(results) == 2
        assert results[0].columns == ["u"]
        assert results[0].data[0].row == [{"name": "A"}]
        assert results[1].data == []

    @pytest.mark.asyncio
    async def test_empty_batch_makes_no_request(self):
        transport = _transport_with(_response())
        assert await transport.submit([]) == []
        transport._client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_statement_errors_raise(self):
        body = {
            "results": [],
            "errors": [{"code": "Neo.ClientError.Statement.SyntaxError", "message": "Invalid input"}],
        }
        transport = _transport_with(_response(body=body))

        with pytest.raises(TransactionError) as exc_info:
            await transport.submit([QueryUnit("MATCH (u RETURN u")])

        assert exc_info.value.errors[0].code == "Neo.ClientError.Statement.SyntaxError"
        assert "Invalid input" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        transport = _transport_with(_response(status_code=401))

        with pytest.raises(httpx.HTTPStatusError):
            await transport.submit([QueryUnit("MATCH (u) RETURN u")])

    @pytest.mark.asyncio
    async def test_timeout_propagates(self):
        transport = Neo4jTransport()
        transport._client = MagicMock()
        transport._client.post = AsyncMock(side_effect=httpx.TimeoutException("Timeout"))

        with pytest.raises(httpx.TimeoutException):
            await transport.submit([QueryUnit("MATCH (u) RETURN u")])
