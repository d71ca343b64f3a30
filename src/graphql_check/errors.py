#!/usr/bin/env python3
"""
errors.py: Exceptions raised by graphql-check

Policy violations are never raised; they are recorded as failed check
outcomes. Only problems that stop a check from running at all live here.
"""

from typing import List, Optional


class GraphQLCheckError(Exception):
    """Base exception for graphql-check."""


class TransportError(GraphQLCheckError):
    """Raised when an HTTP exchange with the endpoint could not be completed."""

    def __init__(self, reason: str, endpoint: Optional[str] = None):
        """
        Initialize transport error.

        Args:
            reason: Short human-readable reason, used as a check detail
            endpoint: URL the request was sent to
        """
        self.reason = reason
        self.endpoint = endpoint
        super().__init__(reason)


class ConfigurationError(GraphQLCheckError):
    """Raised when the run configuration is invalid."""

    def __init__(self, message: str, invalid_fields: Optional[List[str]] = None, details: dict = None):
        self.invalid_fields = invalid_fields or []
        self.details = details or {}
        super().__init__(message)
