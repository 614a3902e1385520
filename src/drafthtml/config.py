"""Renderer settings schema and drafthtml.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field


CONFIG_FILE = "drafthtml.yaml"
ENV_PREFIX = "DRAFTHTML_"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    pretty_print:        bool = Field(default=False, description="Put each element on its own indented line")
    indent_width:        int  = Field(default=2, ge=0, description="Spaces per nesting level when pretty printing")
    max_depth:           int  = Field(default=4, ge=0, description="List depth beyond which items are clamped")
    default_block_tag:   str  = Field(default="p", min_length=1, description="Wrapper tag for unknown block types")
    empty_placeholder:   str  = Field(default="&nbsp;", description="Markup rendered inside an empty block")
    line_break:          str  = Field(default="<br>", description="Markup emitted before each literal newline")
    escape_quotes:       bool = Field(default=False, description="Also escape double quotes in text content")
    preserve_whitespace: bool = Field(default=True, description="Keep leading/trailing/repeated spaces visible")
    offset_unit:         str  = Field(default="codepoint", pattern="^(codepoint|utf16)$", description="codepoint or utf16")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from drafthtml.yaml, then DRAFTHTML_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
