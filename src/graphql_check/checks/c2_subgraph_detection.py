#!/usr/bin/env python3
"""
C2: Subgraph Detection Check

Always probes ``{ _service { sdl } }`` so later checks know whether the
endpoint exposes federation internals. The outcome is only judged when the
caller declared the endpoint a subgraph; otherwise it is recorded as
skipped while the detection result still flows on through the run context.
"""

import logging
from typing import Tuple

from ..base_check import BaseCheck
from ..errors import TransportError
from ..models import CheckOutcome, QueryResult, RunContext

logger = logging.getLogger(__name__)

SERVICE_SDL_QUERY = "query{_service{sdl}}"


def exposes_sdl(result: QueryResult) -> bool:
    """True when the response carries a non-empty federation SDL string."""
    if not result.succeeded:
        return False
    service = result.data_field("_service")
    if not isinstance(service, dict):
        return False
    sdl = service.get("sdl")
    return isinstance(sdl, str) and bool(sdl)


class SubgraphDetection(BaseCheck):
    """C2: detect whether the endpoint is a federation subgraph."""

    check_id = "subgraph_detection"
    description = "Endpoint exposes federation subgraph SDL"

    async def run_check(self, context: RunContext) -> Tuple[CheckOutcome, RunContext]:
        try:
            result = await self.executor.execute(SERVICE_SDL_QUERY, self.config.auth_header)
            detected = exposes_sdl(result)
        except TransportError as e:
            logger.warning(f"Subgraph probe failed, treating endpoint as not a subgraph: {e.reason}")
            detected = False

        logger.info(f"Subgraph detected: {detected}")
        context = context.update(subgraph_detected=detected)

        if not self.config.declared_subgraph:
            return self.skipped(
                "Endpoint not declared as a subgraph", subgraph_detected=detected
            ), context

        if not detected:
            return self.failed("GraphQL endpoint does not expose subgraph SDL"), context

        return self.passed("Endpoint exposes subgraph SDL"), context
