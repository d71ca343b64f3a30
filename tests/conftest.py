"""Pytest configuration for graphql-check tests.

This file configures the test environment and handles import paths centrally.
All test files should use this configuration - DO NOT add sys.path manipulations
in individual test files.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

# Centralized sys.path configuration so tests run without an installed package
src_root = Path(__file__).parent.parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from graphql_check.base_check import TYPENAME_QUERY  # noqa: E402
from graphql_check.checks.c2_subgraph_detection import SERVICE_SDL_QUERY  # noqa: E402
from graphql_check.checks.c3_introspection import SCHEMA_QUERY  # noqa: E402
from graphql_check.models import CheckConfig, QueryResult  # noqa: E402

ENDPOINT = "https://graphql.example.com/graphql"
AUTH_HEADER = "Authorization: Bearer test-token"


def gql(data: Optional[Dict[str, Any]] = None, errors: Optional[List[Any]] = None, status: int = 200) -> QueryResult:
    """Build a QueryResult the way the executor would."""
    return QueryResult(status_code=status, data=data, errors=errors or [])


TYPENAME_OK = gql({"__typename": "Query"})
SDL_OK = gql({"_service": {"sdl": "type Query { me: User }"}})
SDL_NULL = gql({"_service": {"sdl": None}})
NOT_A_SUBGRAPH = gql(errors=[{"message": "Cannot query field \"_service\" on type \"Query\"."}], status=400)
SCHEMA_OPEN = gql({"__schema": {"types": [{"name": "Query"}, {"name": "String"}]}})
INTROSPECTION_BLOCKED = gql(errors=[{"message": "GraphQL introspection is not allowed"}], status=400)
UNAUTHORIZED = gql(errors=[{"message": "Unauthorized"}], status=401)


class FakeExecutor:
    """Scripted stand-in for GraphQLExecutor.

    ``responses`` maps a query, or a ``(query, authenticated)`` pair, to a
    QueryResult or to an exception instance that is raised instead.
    """

    def __init__(self, responses: Dict[Any, Any]):
        self.responses = responses
        self.calls: List[Tuple[str, Optional[str]]] = []

    async def execute(self, query: str, header: Optional[str] = None) -> QueryResult:
        self.calls.append((query, header))
        key = (query, header is not None)
        if key in self.responses:
            response = self.responses[key]
        elif query in self.responses:
            response = self.responses[query]
        else:
            raise AssertionError(f"Unexpected query {query!r} (authenticated={header is not None})")

        if isinstance(response, Exception):
            raise response
        return response

    def queries(self) -> List[str]:
        return [query for query, _ in self.calls]


@pytest.fixture
def config() -> CheckConfig:
    """Provide a plain configuration: no auth, not a subgraph."""
    return CheckConfig(endpoint=ENDPOINT)


@pytest.fixture
def auth_config() -> CheckConfig:
    """Provide a configuration with an auth header."""
    return CheckConfig(endpoint=ENDPOINT, auth_header=AUTH_HEADER)


@pytest.fixture
def subgraph_config() -> CheckConfig:
    """Provide a configuration declaring a secured subgraph."""
    return CheckConfig(endpoint=ENDPOINT, auth_header=AUTH_HEADER, declared_subgraph=True)


@pytest.fixture
def healthy_responses() -> Dict[Any, Any]:
    """Responses of a correctly configured, non-subgraph endpoint with auth."""
    return {
        (TYPENAME_QUERY, True): TYPENAME_OK,
        (TYPENAME_QUERY, False): UNAUTHORIZED,
        SERVICE_SDL_QUERY: NOT_A_SUBGRAPH,
        SCHEMA_QUERY: INTROSPECTION_BLOCKED,
    }
