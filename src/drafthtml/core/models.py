"""Document model consumed by the converter and intermediate render structures"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Model(BaseModel):
    # Accept raw editor keys (camelCase aliases) as well as field names.
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class InlineStyleRange(_Model):
    """A style name applied to [offset, offset + length) of a block's text."""
    offset: int
    length: int
    style:  str


class EntityRange(_Model):
    """An entity-map key applied to [offset, offset + length) of a block's text."""
    offset: int
    length: int
    key:    str

    @field_validator("key", mode="before")
    @classmethod
    def _key_to_str(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class Entity(_Model):
    """A richer annotation (link, image, ...) referenced by entity ranges."""
    type:       str
    mutability: str = "MUTABLE"
    data:       dict[str, Any] = Field(default_factory=dict)


class Block(_Model):
    """One unit of document content: paragraph, heading, list item, ..."""
    key:   str = ""
    type:  str = "unstyled"
    text:  str = ""
    depth: int = Field(default=0, ge=0)
    inline_style_ranges: list[InlineStyleRange] = Field(default_factory=list, alias="inlineStyleRanges")
    entity_ranges:       list[EntityRange]      = Field(default_factory=list, alias="entityRanges")
    data:  dict[str, Any] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _none_data(cls, value: Any) -> Any:
        return {} if value is None else value


class Document(_Model):
    """Ordered blocks plus the entity registry they reference."""
    blocks:     list[Block] = Field(default_factory=list)
    entity_map: dict[str, Entity] = Field(default_factory=dict, alias="entityMap")

    @field_validator("entity_map", mode="before")
    @classmethod
    def _keys_to_str(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {str(k): v for k, v in value.items()}
        return value

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Document":
        """Validate a raw editor content mapping ({"blocks": [...], "entityMap": {...}})."""
        return cls.model_validate(raw)

    def get_entity(self, key: Optional[str]) -> Optional[Entity]:
        """Return the entity registered under key, or None when absent."""
        if key is None:
            return None
        return self.entity_map.get(key)


@dataclass(frozen=True)
class StyledSegment:
    """Atomic [start, end) slice of block text with a fixed set of active annotations."""
    start:  int
    end:    int
    styles: frozenset[str] = frozenset()
    entity: Optional[str] = None    # entity-map key, None when no entity covers the slice


@dataclass
class LeafNode:
    """Tree node wrapping a single block."""
    block: Block


@dataclass
class ListNode:
    """List container; children share list_type and depth, nested lists sit one level deeper."""
    list_type: str
    depth:     int
    children:  list[Union[LeafNode, "ListNode"]] = field(default_factory=list)


BlockNode = Union[LeafNode, ListNode]
