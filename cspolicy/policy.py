"""Content-Security-Policy registry with lazy, cached compilation."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping

import structlog

from cspolicy.directives import NONCE_PLACEHOLDER, is_valueless
from cspolicy.tokens import nonce as format_nonce

logger = structlog.get_logger()

HEADER_NAME = "Content-Security-Policy"
REPORT_ONLY_HEADER_NAME = "Content-Security-Policy-Report-Only"


def header_name(report_only: bool = False) -> str:
    """Return the response header name the compiled policy belongs under."""
    return REPORT_ONLY_HEADER_NAME if report_only else HEADER_NAME


def _normalize_directive(directive: str) -> str:
    return directive.strip().lower()


def _clean_sources(sources: Iterable[str]) -> set[str]:
    """Trim sources and drop blank ones."""
    cleaned = set()
    for source in sources:
        source = source.strip()
        if source:
            cleaned.add(source)
    return cleaned


class Policy:
    """A mutable Content-Security-Policy shared across request handlers.

    - Directive names are trimmed and lowercased; sources are deduplicated
    - compile() output is sorted, so insertion order never matters
    - The serialization is cached until the next mutation
    - A ``{{nonce}}`` source is replaced by the caller's per-request nonce

    Every public method takes the same lock, including compile(), which may
    rebuild the cache.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._directives: dict[str, set[str]] = {}
        self._cache = ""
        self._is_compiled = False
        self._needs_nonce = False

    @classmethod
    def from_mapping(cls, directives: Mapping[str, Iterable[str] | str]) -> Policy:
        """Build a policy from a ``{directive: [sources]}`` mapping.

        A plain string value is a single source, not a sequence of characters.
        """
        policy = cls()
        for directive, sources in directives.items():
            if isinstance(sources, str):
                sources = [sources]
            policy.add(directive, *sources)
        return policy

    def __repr__(self) -> str:
        return f"Policy({self.directives()!r})"

    def __len__(self) -> int:
        with self._lock:
            return len(self._directives)

    def __contains__(self, directive: object) -> bool:
        if not isinstance(directive, str):
            return False
        with self._lock:
            return _normalize_directive(directive) in self._directives

    # ── Mutation ──────────────────────────────────────────────────────

    def add(self, directive: str, *sources: str) -> None:
        """Add sources to a directive, creating it if needed.

        Calling with no usable sources only has an effect for valueless
        directives such as ``sandbox`` or ``upgrade-insecure-requests``.
        """
        key = _normalize_directive(directive)
        if not key:
            return
        valid = _clean_sources(sources)
        if not valid and not is_valueless(key):
            return

        with self._lock:
            existing = self._directives.get(key)
            if existing is None:
                self._directives[key] = valid
                self._invalidate()
            elif not valid <= existing:
                existing.update(valid)
                self._invalidate()

    def set(self, directive: str, *sources: str) -> None:
        """Replace the sources of a directive.

        With no usable sources, a valueless directive is kept without a
        value and any other directive is removed.
        """
        key = _normalize_directive(directive)
        if not key:
            return
        valid = _clean_sources(sources)

        with self._lock:
            if valid or is_valueless(key):
                self._directives[key] = valid
            else:
                self._directives.pop(key, None)
            self._invalidate()

    def remove(self, directive: str) -> None:
        """Remove a directive. Removing an absent directive keeps the cache."""
        key = _normalize_directive(directive)
        with self._lock:
            if self._directives.pop(key, None) is not None:
                self._invalidate()

    def directives(self) -> dict[str, list[str]]:
        """Return a sorted snapshot of the directives and their sources."""
        with self._lock:
            return {key: sorted(self._directives[key]) for key in sorted(self._directives)}

    # ── Compilation ───────────────────────────────────────────────────

    def compile(self, nonce: str | None = None) -> str:
        """Return the header value, injecting ``nonce`` where required.

        Without a nonce, a policy that needs one keeps a visible
        ``'nonce-{{nonce}}'`` marker instead of failing.
        """
        rebuilt: tuple[int, bool] | None = None
        nonce_missing = False
        with self._lock:
            if not self._is_compiled:
                rebuilt = self._build_cache()
            if not self._needs_nonce:
                header = self._cache
            else:
                nonce_missing = not nonce
                value = NONCE_PLACEHOLDER if nonce_missing else nonce
                header = self._cache.replace(NONCE_PLACEHOLDER, format_nonce(value))

        # Log only after the lock is released
        if rebuilt is not None:
            count, needs_nonce = rebuilt
            logger.debug("csp_policy_compiled", directives=count, needs_nonce=needs_nonce)
        if nonce_missing:
            logger.warning("csp_nonce_missing")
        return header

    def _build_cache(self) -> tuple[int, bool]:
        """Serialize the directives into the cache. Caller holds the lock.

        Returns the directive count and whether a nonce is needed.
        """
        parts = []
        needs_nonce = False
        for key in sorted(self._directives):
            sources = sorted(self._directives[key])
            if sources:
                needs_nonce = needs_nonce or NONCE_PLACEHOLDER in sources
                parts.append(f"{key} {' '.join(sources)}")
            else:
                parts.append(key)

        self._cache = "; ".join(parts)
        self._needs_nonce = needs_nonce
        self._is_compiled = True
        return len(parts), needs_nonce

    def _invalidate(self) -> None:
        self._is_compiled = False
        self._cache = ""
        self._needs_nonce = False
