#!/usr/bin/env python3
"""
Data models and configuration for graphql-check.

Contains the configuration of a run, the parsed GraphQL response of a single
HTTP exchange, per-check outcomes and the aggregated verdict.
"""

import os
import re
from dataclasses import dataclass, field, asdict, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Any, Optional, Tuple
from urllib.parse import urlparse

from .errors import ConfigurationError

DEFAULT_TIMEOUT_SECONDS = 10.0

# RFC 7230 token and field-value rules
HEADER_NAME_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
HEADER_VALUE_FORBIDDEN = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


def parse_header(line: str) -> Tuple[str, str]:
    """Split a ``"Name: value"`` header line into its name and value.

    Raises:
        ConfigurationError: if the line has no colon, the name is not a valid
            header token, or the value contains control characters
    """
    name, sep, value = line.partition(":")
    name = name.strip()
    value = value.strip()
    if not sep or not HEADER_NAME_PATTERN.match(name) or HEADER_VALUE_FORBIDDEN.search(value):
        raise ConfigurationError(
            "Provided `auth` input was not a valid header in the format of `name: value`",
            invalid_fields=["auth"],
        )
    return name, value


def parse_boolean(value: str, name: str) -> bool:
    """Parse a ``"true"``/``"false"`` action input."""
    if value == "true":
        return True
    if value == "false":
        return False
    raise ConfigurationError(f"Input `{name}` can only be `true` or `false`", invalid_fields=[name])


def _validate_endpoint(endpoint: str) -> None:
    parsed = urlparse(endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError("Bad URI", invalid_fields=["endpoint"], details={"endpoint": endpoint})


@dataclass(frozen=True)
class CheckConfig:
    """
    Configuration of a single graphql-check run.

    The two optional-override rules are resolved here, once:
    ``effective_allow_introspection`` falls back to ``declared_subgraph`` and
    ``require_subgraph_auth`` is the inverse of ``insecure_subgraph``.
    """
    endpoint: str
    auth_header: Optional[str] = None
    declared_subgraph: bool = False
    allow_introspection: Optional[bool] = None
    insecure_subgraph: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    effective_allow_introspection: bool = field(init=False)
    require_subgraph_auth: bool = field(init=False)

    def __post_init__(self):
        if not self.endpoint:
            raise ConfigurationError("Input `endpoint` is required", invalid_fields=["endpoint"])
        if self.auth_header == "":
            object.__setattr__(self, "auth_header", None)
        if self.auth_header is not None:
            parse_header(self.auth_header)

        effective = self.allow_introspection
        if effective is None:
            effective = self.declared_subgraph
        object.__setattr__(self, "effective_allow_introspection", effective)
        object.__setattr__(self, "require_subgraph_auth", not self.insecure_subgraph)

    @property
    def auth_enabled(self) -> bool:
        return self.auth_header is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format with the auth header redacted."""
        result = asdict(self)
        if self.auth_header is not None:
            name, _ = parse_header(self.auth_header)
            result["auth_header"] = f"{name}: ***"
        return result

    @classmethod
    def from_inputs(
        cls,
        endpoint: str,
        auth: str = "",
        subgraph: str = "false",
        allow_introspection: str = "",
        insecure_subgraph: str = "false",
        timeout: Optional[str] = None,
    ) -> 'CheckConfig':
        """Build a configuration from raw string inputs.

        Every invalid input is collected so the caller sees all of them at
        once.

        Raises:
            ConfigurationError: if any input is invalid
        """
        messages: List[str] = []
        invalid_fields: List[str] = []

        def collect(error: ConfigurationError) -> None:
            messages.append(str(error))
            invalid_fields.extend(error.invalid_fields)

        endpoint = (endpoint or "").strip()
        if not endpoint:
            collect(ConfigurationError("Input `endpoint` is required", invalid_fields=["endpoint"]))
        else:
            try:
                _validate_endpoint(endpoint)
            except ConfigurationError as e:
                collect(e)

        auth_header = auth or None
        if auth_header is not None:
            try:
                parse_header(auth_header)
            except ConfigurationError as e:
                collect(e)

        declared_subgraph = False
        try:
            declared_subgraph = parse_boolean(subgraph, "subgraph")
        except ConfigurationError as e:
            collect(e)

        allow = None
        if allow_introspection:
            try:
                allow = parse_boolean(allow_introspection, "allow_introspection")
            except ConfigurationError as e:
                collect(e)

        insecure = False
        try:
            insecure = parse_boolean(insecure_subgraph, "insecure_subgraph")
        except ConfigurationError as e:
            collect(e)

        timeout_seconds = DEFAULT_TIMEOUT_SECONDS
        if timeout:
            try:
                timeout_seconds = float(timeout)
                if timeout_seconds <= 0:
                    raise ValueError(timeout)
            except ValueError:
                collect(ConfigurationError(
                    "Input `timeout` must be a positive number of seconds", invalid_fields=["timeout"]
                ))

        if messages:
            raise ConfigurationError(", ".join(messages), invalid_fields=invalid_fields)

        return cls(
            endpoint=endpoint,
            auth_header=auth_header,
            declared_subgraph=declared_subgraph,
            allow_introspection=allow,
            insecure_subgraph=insecure,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(cls) -> 'CheckConfig':
        """Create configuration from environment variables.

        Environment variables:
            INPUT_ENDPOINT: GraphQL endpoint to check (required)
            INPUT_AUTH: Full header line used for authenticated queries
            INPUT_SUBGRAPH: Whether the endpoint is a subgraph (default: false)
            INPUT_ALLOW_INTROSPECTION: Whether introspection is allowed (default: value of subgraph)
            INPUT_INSECURE_SUBGRAPH: Whether the subgraph may skip auth (default: false)
            GRAPHQL_CHECK_TIMEOUT: Per-request timeout in seconds (default: 10)
        """
        return cls.from_inputs(
            endpoint=os.getenv("INPUT_ENDPOINT", ""),
            auth=os.getenv("INPUT_AUTH", ""),
            subgraph=os.getenv("INPUT_SUBGRAPH") or "false",
            allow_introspection=os.getenv("INPUT_ALLOW_INTROSPECTION", ""),
            insecure_subgraph=os.getenv("INPUT_INSECURE_SUBGRAPH") or "false",
            timeout=os.getenv("GRAPHQL_CHECK_TIMEOUT"),
        )


@dataclass
class QueryResult:
    """Parsed response of one completed HTTP exchange.

    Failed exchanges raise ``TransportError`` instead, so a result always has
    ``transport_ok`` set.
    """
    status_code: int
    data: Optional[Dict[str, Any]] = None
    errors: List[Any] = field(default_factory=list)
    transport_ok: bool = True

    @property
    def graphql_errors_present(self) -> bool:
        return bool(self.errors)

    @property
    def succeeded(self) -> bool:
        """True when the server answered the query: HTTP 200, data and no errors."""
        return (
            self.transport_ok
            and self.status_code == 200
            and not self.errors
            and isinstance(self.data, dict)
        )

    def data_field(self, name: str) -> Any:
        """Return a top-level ``data`` field, or None."""
        if not isinstance(self.data, dict):
            return None
        return self.data.get(name)


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    SKIPPED = "skipped"


@dataclass
class CheckOutcome:
    """Outcome of a single named check."""
    check_id: str
    status: CheckStatus
    detail: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    latency_ms: float = 0.0
    details: Optional[Dict[str, Any]] = None
    fatal: bool = False

    @property
    def failed(self) -> bool:
        return self.status == CheckStatus.FAIL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result = asdict(self)
        result['status'] = self.status.value
        result['timestamp'] = self.timestamp.isoformat()
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CheckOutcome':
        """Create from dictionary format."""
        data = dict(data)
        if isinstance(data.get('timestamp'), str):
            data['timestamp'] = datetime.fromisoformat(data['timestamp'])
        data['status'] = CheckStatus(data['status'])
        return cls(**data)


@dataclass(frozen=True)
class RunContext:
    """State threaded from one check to the next within a single run."""
    subgraph_detected: bool = False

    def update(self, **changes: Any) -> 'RunContext':
        return replace(self, **changes)


@dataclass
class Verdict:
    """Aggregated result of every check that ran, in check order."""
    outcomes: List[CheckOutcome] = field(default_factory=list)

    @property
    def overall_success(self) -> bool:
        return not any(outcome.failed for outcome in self.outcomes)

    @property
    def failures(self) -> List[CheckOutcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]

    @property
    def error_message(self) -> str:
        """Details of every failed check joined in check order, without duplicates."""
        seen: List[str] = []
        for outcome in self.failures:
            if outcome.detail not in seen:
                seen.append(outcome.detail)
        return ", ".join(seen)

    def outcome(self, check_id: str) -> Optional[CheckOutcome]:
        for outcome in self.outcomes:
            if outcome.check_id == check_id:
                return outcome
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_success": self.overall_success,
            "error": self.error_message,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }
