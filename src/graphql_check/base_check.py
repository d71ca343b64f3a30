#!/usr/bin/env python3
"""
Base check interface for graphql-check.

Provides the common interface that the endpoint checks implement.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from .executor import GraphQLExecutor
from .models import CheckConfig, CheckOutcome, CheckStatus, RunContext

logger = logging.getLogger(__name__)

TYPENAME_QUERY = "query{__typename}"


class BaseCheck(ABC):
    """Abstract base class for all endpoint checks."""

    check_id: str = ""
    description: str = ""

    def __init__(self, config: CheckConfig, executor: GraphQLExecutor):
        """
        Initialize base check.

        Args:
            config: Run configuration
            executor: Executor used to send queries to the endpoint
        """
        self.config = config
        self.executor = executor

    @abstractmethod
    async def run_check(self, context: RunContext) -> Tuple[CheckOutcome, RunContext]:
        """
        Execute the check.

        Args:
            context: State produced by the checks that ran before this one

        Returns:
            The outcome of this check and the context for the next one
        """
        pass

    async def execute(self, context: RunContext) -> Tuple[CheckOutcome, RunContext]:
        """
        Execute the check with timing and error handling.

        Wraps run_check() so an unexpected exception becomes a failed outcome
        instead of aborting the run.
        """
        start_time = time.time()

        try:
            outcome, context = await self.run_check(context)
        except Exception as e:
            logger.exception(f"Check {self.check_id} raised an unexpected error")
            outcome = self._outcome(
                CheckStatus.FAIL,
                f"Check execution failed: {str(e)}",
                details={"exception_type": type(e).__name__, "exception_message": str(e)},
            )

        if outcome.check_id != self.check_id:
            outcome.check_id = self.check_id
        outcome.latency_ms = (time.time() - start_time) * 1000
        return outcome, context

    def _outcome(
        self,
        status: CheckStatus,
        detail: str,
        details: Optional[Dict[str, Any]] = None,
        fatal: bool = False,
    ) -> CheckOutcome:
        return CheckOutcome(
            check_id=self.check_id,
            status=status,
            detail=detail,
            details=details,
            fatal=fatal,
        )

    def passed(self, detail: str, **details: Any) -> CheckOutcome:
        return self._outcome(CheckStatus.PASS, detail, details or None)

    def failed(self, detail: str, fatal: bool = False, **details: Any) -> CheckOutcome:
        return self._outcome(CheckStatus.FAIL, detail, details or None, fatal=fatal)

    def skipped(self, detail: str, **details: Any) -> CheckOutcome:
        return self._outcome(CheckStatus.SKIPPED, detail, details or None)
