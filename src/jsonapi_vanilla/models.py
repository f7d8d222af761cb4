"""Pydantic configuration models for the jsonapi-vanilla CLI.

The document graph itself (:class:`~jsonapi_vanilla.parser.registry.Resource`,
:class:`~jsonapi_vanilla.document.Document`) is deliberately *not* built on
Pydantic: resources compare by identity and may form cycles.  Only the
user's persisted settings live here, serialised as JSON in the config
directory by :mod:`jsonapi_vanilla.config`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

OUTPUT_FORMATS = ("auto", "json", "plain", "rich")


class OutputConfig(BaseModel):
    """Default output preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )
    show_stubs: bool = Field(
        default=True,
        description="Include resources only known from relationship linkage in listings",
    )

    @field_validator("format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        if value not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format {value!r}; expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        return value


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/jsonapi-vanilla/config.json``.

    Loaded and saved by :func:`~jsonapi_vanilla.config.load_global_config`
    and :func:`~jsonapi_vanilla.config.save_global_config`.  See
    :func:`~jsonapi_vanilla.config.resolve_config` for how environment
    variables and CLI flags override it.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
