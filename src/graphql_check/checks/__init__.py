"""
Endpoint Check Modules

Each check covers one aspect of a GraphQL endpoint's configuration:
- C1: Reachability (fatal gate)
- C2: Subgraph Detection (feeds C4)
- C3: Introspection Policy
- C4: Authentication Enforcement
"""

from .c1_reachability import Reachability
from .c2_subgraph_detection import SubgraphDetection
from .c3_introspection import IntrospectionPolicy
from .c4_auth_enforcement import AuthEnforcement

# Checks in the order they must run; later checks read state from earlier ones
CHECK_ORDER = [
    Reachability,
    SubgraphDetection,
    IntrospectionPolicy,
    AuthEnforcement,
]

CHECK_REGISTRY = {check.check_id: check for check in CHECK_ORDER}

__all__ = [
    'Reachability',
    'SubgraphDetection',
    'IntrospectionPolicy',
    'AuthEnforcement',
    'CHECK_ORDER',
    'CHECK_REGISTRY',
]
