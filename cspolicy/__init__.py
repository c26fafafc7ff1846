"""Thread-safe Content-Security-Policy builder."""

from cspolicy.policy import Policy, header_name
from cspolicy.tokens import hash_source, nonce

__all__ = ["Policy", "hash_source", "header_name", "nonce"]
