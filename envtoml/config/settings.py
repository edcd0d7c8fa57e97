"""
Purpose:
    - Hold the knobs of a conversion (prefix and the three output policies)
    - Validate overrides coming from callers or the CLI
"""

from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from envtoml.core.utility import validation_error_parser
from envtoml.errors.errors import SettingsError

SectionOrder = Literal["sorted", "insertion"]
DuplicatePolicy = Literal["error", "first", "last", "keep"]
ValueEncoding = Literal["escape", "reject", "raw"]

DEFAULT_PREFIX = "APP_"


class ConversionSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    prefix: str = Field(default=DEFAULT_PREFIX, description="Required leading part of a name")
    section_order: SectionOrder = Field(
        default="sorted", description="Order of [section] blocks in the output"
    )
    on_duplicate: DuplicatePolicy = Field(
        default="error", description="What to do when two names map to one (section, key)"
    )
    value_encoding: ValueEncoding = Field(
        default="escape", description="How quotes, backslashes and control chars are handled"
    )


def load_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    base: Optional[ConversionSettings] = None,
) -> ConversionSettings:
    """
    Layer ``overrides`` on top of ``base`` (or the defaults) and validate.
    Keys whose value is None are ignored so unset CLI flags fall through.
    On failure: raises SettingsError carrying the parsed pydantic errors.
    """
    merged: dict[str, Any] = (base or ConversionSettings()).model_dump()
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    try:
        return ConversionSettings(**merged)
    except ValidationError as e:
        parsed_error = validation_error_parser(e)
        paths = ", ".join(sorted({error["path"] for error in parsed_error}))
        raise SettingsError(
            f"Invalid conversion setting(s): {paths}",
            errors=parsed_error,
            component="config.settings",
        ) from e
