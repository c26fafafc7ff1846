"""Well-known CSP directive names and source keywords."""

from __future__ import annotations

# Fetch directives
CHILD_SRC = "child-src"
CONNECT_SRC = "connect-src"
DEFAULT_SRC = "default-src"
FONT_SRC = "font-src"
FRAME_SRC = "frame-src"
IMG_SRC = "img-src"
MANIFEST_SRC = "manifest-src"
MEDIA_SRC = "media-src"
OBJECT_SRC = "object-src"
PREFETCH_SRC = "prefetch-src"  # deprecated
SCRIPT_SRC = "script-src"
SCRIPT_SRC_ATTR = "script-src-attr"
SCRIPT_SRC_ELEM = "script-src-elem"
STYLE_SRC = "style-src"
STYLE_SRC_ATTR = "style-src-attr"
STYLE_SRC_ELEM = "style-src-elem"
WORKER_SRC = "worker-src"

# Document directives
BASE_URI = "base-uri"
PLUGIN_TYPES = "plugin-types"  # deprecated
SANDBOX = "sandbox"

# Navigation directives
FORM_ACTION = "form-action"
FRAME_ANCESTORS = "frame-ancestors"
NAVIGATE_TO = "navigate-to"  # experimental

# Reporting directives
REPORT_TO = "report-to"
REPORT_URI = "report-uri"  # deprecated

# Other directives
BLOCK_ALL_MIXED_CONTENT = "block-all-mixed-content"
REQUIRE_SRI_FOR = "require-sri-for"
TRUSTED_TYPES = "trusted-types"
UPGRADE_INSECURE_REQUESTS = "upgrade-insecure-requests"

# Replaced with the per-request nonce at compile time
NONCE_PLACEHOLDER = "{{nonce}}"

# Keyword sources
SOURCE_SELF = "'self'"
SOURCE_UNSAFE_INLINE = "'unsafe-inline'"
SOURCE_UNSAFE_EVAL = "'unsafe-eval'"
SOURCE_NONE = "'none'"
SOURCE_NONCE = NONCE_PLACEHOLDER
SOURCE_STRICT_DYNAMIC = "'strict-dynamic'"
SOURCE_REPORT_SAMPLE = "'report-sample'"
SOURCE_UNSAFE_HASHES = "'unsafe-hashes'"

# Scheme sources
SCHEME_BLOB = "blob:"
SCHEME_DATA = "data:"
SCHEME_FILESYSTEM = "filesystem:"
SCHEME_HTTP = "http:"
SCHEME_HTTPS = "https:"
SCHEME_MEDIASTREAM = "mediastream:"

# Directives that are meaningful with no sources at all
VALUELESS_DIRECTIVES: frozenset[str] = frozenset({
    BLOCK_ALL_MIXED_CONTENT,
    SANDBOX,
    UPGRADE_INSECURE_REQUESTS,
})


def is_valueless(directive: str) -> bool:
    """Return True if the directive may be emitted without sources."""
    return directive.strip().lower() in VALUELESS_DIRECTIVES
