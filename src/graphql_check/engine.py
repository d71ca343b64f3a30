#!/usr/bin/env python3
"""
Check Engine - ordered execution of the endpoint checks.

Runs every check in CHECK_ORDER one after another, threading a RunContext
from each check into the next, and folds the outcomes into a Verdict.
"""

import logging
from typing import List, Optional, Type

from .base_check import BaseCheck
from .checks import CHECK_ORDER
from .executor import GraphQLExecutor
from .models import CheckConfig, CheckStatus, RunContext, Verdict

logger = logging.getLogger(__name__)


class CheckEngine:
    """Runs one pass of checks against a GraphQL endpoint."""

    def __init__(
        self,
        config: CheckConfig,
        executor: Optional[GraphQLExecutor] = None,
        checks: Optional[List[Type[BaseCheck]]] = None,
    ) -> None:
        self.config = config
        self.executor = executor
        self.check_classes = checks if checks is not None else CHECK_ORDER

    async def run(self) -> Verdict:
        """Run all checks and return the verdict.

        A fresh context is used on every call, so repeated runs against an
        unchanged endpoint give the same verdict.
        """
        if self.executor is not None:
            return await self._run_checks(self.executor)

        async with GraphQLExecutor(self.config.endpoint, self.config.timeout_seconds) as executor:
            return await self._run_checks(executor)

    async def _run_checks(self, executor: GraphQLExecutor) -> Verdict:
        verdict = Verdict()
        context = RunContext()

        logger.info(f"Checking GraphQL endpoint {self.config.endpoint}")

        for check_class in self.check_classes:
            check = check_class(self.config, executor)
            logger.info(f"Running check {check.check_id}: {check.description}")

            outcome, context = await check.execute(context)
            verdict.outcomes.append(outcome)

            log = logger.warning if outcome.status == CheckStatus.FAIL else logger.info
            log(f"Check {check.check_id}: {outcome.status.value} ({outcome.detail})")

            if outcome.fatal:
                logger.error(f"Check {check.check_id} failed fatally, skipping remaining checks")
                break

        if verdict.overall_success:
            logger.info("✅ All checks passed")
        else:
            logger.warning(f"❌ {len(verdict.failures)} check(s) failed")

        return verdict
