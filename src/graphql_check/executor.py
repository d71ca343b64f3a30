#!/usr/bin/env python3
"""
Query executor for graphql-check.

Sends a single GraphQL query over HTTP POST and classifies the outcome as
either a parsed QueryResult or a TransportError. One attempt per call.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from .errors import TransportError
from .models import DEFAULT_TIMEOUT_SECONDS, QueryResult, parse_header

logger = logging.getLogger(__name__)


class GraphQLExecutor:
    """Executes GraphQL queries against one endpoint.

    Use as an async context manager; it owns its ``aiohttp.ClientSession``
    unless one is passed in.
    """

    def __init__(
        self,
        endpoint: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self._session = session
        self._owns_session = session is None
        self.request_count = 0

    async def __aenter__(self) -> "GraphQLExecutor":
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds)
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def execute(self, query: str, header: Optional[str] = None) -> QueryResult:
        """
        Send ``query`` to the endpoint.

        Args:
            query: GraphQL query document
            header: Optional full header line (``"Name: value"``) to attach

        Returns:
            QueryResult for any received HTTP response, including non-2xx ones

        Raises:
            TransportError: if the exchange could not be completed or a 2xx
                response did not carry a JSON object
        """
        if self._session is None:
            raise RuntimeError("GraphQLExecutor must be used as an async context manager")

        headers = {}
        if header is not None:
            name, value = parse_header(header)
            headers[name] = value

        self.request_count += 1
        logger.debug(
            f"POST {self.endpoint} query={query!r} auth_header={'yes' if headers else 'no'}"
        )

        try:
            async with self._session.post(
                self.endpoint,
                json={"query": query},
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            ) as resp:
                status = resp.status
                try:
                    body = await resp.json(content_type=None)
                except ValueError as e:
                    logger.debug(f"Failed to parse JSON response (HTTP {status}): {e}")
                    body = None

        except asyncio.TimeoutError:
            logger.warning(f"Request to {self.endpoint} timed out after {self.timeout_seconds}s")
            raise TransportError(f"Timed out after {self.timeout_seconds}s", self.endpoint)

        except aiohttp.ClientError as e:
            logger.warning(f"Could not connect to {self.endpoint}: {e}")
            raise TransportError("Could not connect", self.endpoint) from e

        logger.debug(f"HTTP {status} from {self.endpoint}")
        return self._classify(status, body)

    def _classify(self, status: int, body: Any) -> QueryResult:
        if not isinstance(body, dict):
            if 200 <= status < 300:
                raise TransportError("Not GraphQL", self.endpoint)
            return QueryResult(status_code=status)

        errors = body.get("errors")
        if errors is None:
            errors = []
        elif not isinstance(errors, list):
            errors = [errors]

        data = body.get("data")
        if not isinstance(data, dict):
            data = None

        return QueryResult(status_code=status, data=data, errors=errors)
