"""Pydantic models for policy presets."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class PolicyDocument(BaseModel):
    """A named policy as written in the presets file."""

    report_only: bool = False
    directives: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("directives", mode="before")
    @classmethod
    def none_means_valueless(cls, value):
        # "upgrade-insecure-requests:" with no value loads from YAML as None
        if isinstance(value, dict):
            return {key: [] if sources is None else sources for key, sources in value.items()}
        return value
