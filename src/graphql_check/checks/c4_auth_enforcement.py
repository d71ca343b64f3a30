#!/usr/bin/env python3
"""
C4: Authentication Enforcement Check

With an auth header configured, repeats the basic query without it and
fails if the server still answers. Without an auth header, fails when the
endpoint was detected as a subgraph (whether or not it was declared one)
unless insecure subgraphs were explicitly allowed.
"""

import logging
from typing import Tuple

from ..base_check import BaseCheck, TYPENAME_QUERY
from ..errors import TransportError
from ..models import CheckOutcome, RunContext

logger = logging.getLogger(__name__)


class AuthEnforcement(BaseCheck):
    """C4: queries without credentials are rejected."""

    check_id = "auth_enforcement"
    description = "Endpoint rejects unauthenticated queries"

    async def run_check(self, context: RunContext) -> Tuple[CheckOutcome, RunContext]:
        if not self.config.auth_enabled:
            if context.subgraph_detected and self.config.require_subgraph_auth:
                return self.failed("Subgraph is publicly accessible without authentication"), context
            return self.skipped("No auth header configured"), context

        try:
            result = await self.executor.execute(TYPENAME_QUERY)
        except TransportError as e:
            # The unauthenticated probe could not complete, so access was not granted.
            logger.warning(f"Unauthenticated probe failed, assuming auth is enforced: {e.reason}")
            return self.passed("Could not confirm unauthenticated access", reason=e.reason), context

        if result.succeeded and isinstance(result.data_field("__typename"), str):
            return self.failed(
                "Auth not enforced: able to make queries with no authentication header"
            ), context

        return self.passed(
            "Unauthenticated query was rejected",
            status_code=result.status_code,
            rejected_with_errors=result.graphql_errors_present,
        ), context
