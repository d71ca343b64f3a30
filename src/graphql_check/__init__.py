"""
graphql-check - post-deployment health probe for GraphQL endpoints

Runs reachability, subgraph detection, introspection policy and
authentication enforcement checks once and reports a single verdict.
"""

from .models import CheckConfig, CheckOutcome, CheckStatus, QueryResult, RunContext, Verdict
from .errors import ConfigurationError, GraphQLCheckError, TransportError
from .executor import GraphQLExecutor
from .engine import CheckEngine
from .reporter import Reporter
from .checks import *

__version__ = "1.0.0"

__all__ = [
    'CheckConfig',
    'CheckOutcome',
    'CheckStatus',
    'QueryResult',
    'RunContext',
    'Verdict',
    'ConfigurationError',
    'GraphQLCheckError',
    'TransportError',
    'GraphQLExecutor',
    'CheckEngine',
    'Reporter',
    # Check classes are exported via checks.__all__
]
