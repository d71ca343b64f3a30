#!/usr/bin/env python3
"""
C1: Reachability Check

Sends ``{ __typename }`` to the endpoint, with the configured auth header,
and expects a GraphQL answer. A transport failure here is fatal: nothing
else can be judged about an endpoint that cannot be reached.
"""

import json
import logging
from typing import Tuple

from ..base_check import BaseCheck, TYPENAME_QUERY
from ..errors import TransportError
from ..models import CheckOutcome, RunContext

logger = logging.getLogger(__name__)


class Reachability(BaseCheck):
    """C1: the endpoint answers a basic GraphQL query."""

    check_id = "reachability"
    description = "Endpoint answers a basic GraphQL query"

    async def run_check(self, context: RunContext) -> Tuple[CheckOutcome, RunContext]:
        try:
            result = await self.executor.execute(TYPENAME_QUERY, self.config.auth_header)
        except TransportError as e:
            logger.error(f"Endpoint {self.config.endpoint} is unreachable: {e.reason}")
            return self.failed(e.reason, fatal=True, endpoint=self.config.endpoint), context

        if result.status_code != 200:
            return self.failed(f"Got status code: {result.status_code}"), context

        if result.graphql_errors_present:
            return self.failed(
                f"Received error from GraphQL server: {json.dumps(result.errors)}",
                errors=result.errors,
            ), context

        typename = result.data_field("__typename")
        if not isinstance(typename, str) or not typename:
            return self.failed("Not GraphQL", response=result.data), context

        return self.passed(f"Endpoint answered as `{typename}`", typename=typename), context
