"""Pure-function formatters for nonce and hash source expressions."""

from __future__ import annotations

_NONCE_PREFIX = "nonce-"


def nonce(value: str) -> str:
    """Format a nonce value as a CSP source expression.

    Idempotent: an already formatted source is returned unchanged.

    Example:
        >>> nonce("abc")
        "'nonce-abc'"
        >>> nonce("'nonce-abc'")
        "'nonce-abc'"
    """
    value = value.strip().strip("'")
    if value.startswith(_NONCE_PREFIX):
        value = value[len(_NONCE_PREFIX):]
    return f"'{_NONCE_PREFIX}{value}'"


def hash_source(algorithm: str, value: str) -> str:
    """Format a base64 digest as a CSP hash source expression.

    Anything that already looks like an ``sha*-`` tag is dropped and
    replaced by ``algorithm``. The digest itself is not validated.

    Example:
        >>> hash_source("sha256", "xyz")
        "'sha256-xyz'"
        >>> hash_source("sha256", "'sha384-xyz'")
        "'sha256-xyz'"
    """
    value = value.strip().strip("'")
    dash = value.find("-")
    if dash > 0 and value[:dash].startswith("sha"):
        value = value[dash + 1:]
    return f"'{algorithm}-{value}'"
