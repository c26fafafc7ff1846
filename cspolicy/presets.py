"""YAML policy presets (strict/balanced/permissive)."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import TypeAdapter

from cspolicy.config.loader import get_settings
from cspolicy.models.policy import PolicyDocument
from cspolicy.policy import Policy, header_name

logger = structlog.get_logger()

_PRESETS_ADAPTER = TypeAdapter(dict[str, PolicyDocument])

DEFAULT_PRESET = "balanced"

# Cache loaded presets
_presets: dict[str, PolicyDocument] | None = None


def load_presets() -> dict[str, PolicyDocument]:
    """Load presets from the configured YAML file, caching after first load."""
    global _presets
    if _presets is not None:
        return _presets
    path = Path(get_settings().presets_file)
    if not path.exists():
        logger.error("preset_file_not_found", path=str(path))
        _presets = {}
        return _presets
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    # "name:" with no body loads as None
    if isinstance(raw, dict):
        raw = {name: doc or {} for name, doc in raw.items()}
    _presets = _PRESETS_ADAPTER.validate_python(raw)
    logger.info("presets_loaded", path=str(path), presets=sorted(_presets))
    return _presets


def reset_presets_cache() -> None:
    """Reset the presets cache (for testing)."""
    global _presets
    _presets = None


def get_preset(name: str | None = None) -> PolicyDocument:
    """Return a preset by name, falling back to the balanced preset."""
    name = name or get_settings().preset
    presets = load_presets()
    document = presets.get(name)
    if document is None:
        logger.warning("preset_not_found", preset=name, fallback=DEFAULT_PRESET)
        document = presets.get(DEFAULT_PRESET, PolicyDocument())
    return document


def build_policy(name: str | None = None) -> Policy:
    """Build a fresh Policy from a preset. Each call returns a new instance."""
    return Policy.from_mapping(get_preset(name).directives)


def preset_header_name(name: str | None = None) -> str:
    """Header name for a preset, honoring the global report-only override."""
    return header_name(get_settings().report_only or get_preset(name).report_only)
