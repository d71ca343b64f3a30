#!/usr/bin/env python3
"""
C3: Introspection Policy Check

When introspection is not allowed, queries ``__schema`` anonymously and
fails if the server answers with schema data. The auth header is never
sent: introspection must be blocked for anonymous callers.
"""

from typing import Tuple

from ..base_check import BaseCheck
from ..errors import TransportError
from ..models import CheckOutcome, RunContext

SCHEMA_QUERY = "query{__schema{types{name}}}"


class IntrospectionPolicy(BaseCheck):
    """C3: introspection is disabled unless explicitly allowed."""

    check_id = "introspection"
    description = "Introspection is disabled for anonymous callers"

    async def run_check(self, context: RunContext) -> Tuple[CheckOutcome, RunContext]:
        if self.config.effective_allow_introspection:
            return self.skipped("Introspection is allowed"), context

        try:
            result = await self.executor.execute(SCHEMA_QUERY)
        except TransportError as e:
            return self.failed(e.reason), context

        if isinstance(result.data_field("__schema"), dict):
            return self.failed(
                "Introspection is enabled for the GraphQL server but not allowed"
            ), context

        return self.passed(
            "Introspection is disabled",
            status_code=result.status_code,
            rejected_with_errors=result.graphql_errors_present,
        ), context
