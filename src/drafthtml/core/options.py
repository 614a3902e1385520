"""Default tag mappings, caller render options and the per-call merged render context"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from drafthtml.config import Settings
from drafthtml.core.models import Block, Entity
from drafthtml.core.utils.markup import normalize_attributes, stringify_attrs, style_to_css


class StyleDescriptor(BaseModel):
    """Element, attributes and inline CSS used to wrap content.

    `void` elements (e.g. <img/>) replace the wrapped content instead of enclosing it.
    """
    model_config = ConfigDict(frozen=True)

    element:    str = "span"
    attributes: Optional[dict[str, Any]] = None
    style:      Optional[dict[str, Any]] = None
    void:       bool = False

    def attrs(self) -> dict[str, Any]:
        """Normalized attributes with `style` rendered to a CSS string."""
        attrs = normalize_attributes(self.attributes) or {}
        if self.style is not None:
            attrs["style"] = style_to_css(self.style)
        return attrs

    def open_tag(self) -> str:
        if self.void:
            return f"<{self.element}{stringify_attrs(self.attrs())}/>"
        return f"<{self.element}{stringify_attrs(self.attrs())}>"

    def close_tag(self) -> str:
        return "" if self.void else f"</{self.element}>"


def coerce_descriptor(value: Any) -> Optional[StyleDescriptor]:
    """Accept a StyleDescriptor, a plain mapping or None from caller hooks."""
    if value is None or isinstance(value, StyleDescriptor):
        return value
    if isinstance(value, Mapping):
        return StyleDescriptor.model_validate(dict(value))
    raise TypeError(f"Expected a StyleDescriptor, mapping or None, got {type(value).__name__}")


BlockRenderer = Callable[[Block], Optional[str]]
BlockStyleFn = Callable[[Block], Any]
EntityStyler = Callable[[Entity, str], Any]
InlineStyleFn = Callable[[frozenset], Any]


DEFAULT_BLOCK_TAGS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "unstyled":            ("p",),
    "paragraph":           ("p",),
    "header-one":          ("h1",),
    "header-two":          ("h2",),
    "header-three":        ("h3",),
    "header-four":         ("h4",),
    "header-five":         ("h5",),
    "header-six":          ("h6",),
    "unordered-list-item": ("li",),
    "ordered-list-item":   ("li",),
    "blockquote":          ("blockquote",),
    "code-block":          ("pre", "code"),
    "atomic":              ("figure",),
})

DEFAULT_LIST_TAGS: Mapping[str, str] = MappingProxyType({
    "unordered-list-item": "ul",
    "ordered-list-item":   "ol",
})

DEFAULT_INLINE_STYLES: Mapping[str, StyleDescriptor] = MappingProxyType({
    "BOLD":          StyleDescriptor(element="strong"),
    "CODE":          StyleDescriptor(element="code"),
    "ITALIC":        StyleDescriptor(element="em"),
    "STRIKETHROUGH": StyleDescriptor(element="del"),
    "UNDERLINE":     StyleDescriptor(element="u"),
})

# Inner-most to outer-most: <code><del><u><em><strong>x</strong></em></u></del></code>
DEFAULT_STYLE_ORDER: tuple[str, ...] = ("BOLD", "ITALIC", "UNDERLINE", "STRIKETHROUGH", "CODE")

# Styles that are not wrapped inside blocks of the given type.
SUPPRESSED_STYLES: Mapping[str, frozenset[str]] = MappingProxyType({
    "code-block": frozenset({"CODE"}),
})


class RenderOptions(Settings):
    """Caller options for one conversion: Settings plus tag overrides and render hooks."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    block_tags:      dict[str, Union[str, tuple[str, ...]]] = Field(default_factory=dict)
    inline_styles:   dict[str, StyleDescriptor] = Field(default_factory=dict)
    list_tags:       dict[str, str] = Field(default_factory=dict)
    block_renderers: dict[str, BlockRenderer] = Field(default_factory=dict)
    block_style_fn:  Optional[BlockStyleFn] = None
    entity_stylers:  dict[str, EntityStyler] = Field(default_factory=dict)
    inline_style_fn: Optional[InlineStyleFn] = None

    @field_validator("inline_styles", mode="before")
    @classmethod
    def _element_shorthand(cls, value: Any) -> Any:
        # {"HIGHLIGHT": "mark"} is shorthand for {"HIGHLIGHT": {"element": "mark"}}
        if isinstance(value, Mapping):
            return {k: {"element": v} if isinstance(v, str) else v for k, v in value.items()}
        return value

    @classmethod
    def from_settings(cls, settings: Settings, **hooks: Any) -> "RenderOptions":
        """Build options from loaded Settings plus caller mappings/hooks."""
        return cls(**settings.model_dump(), **hooks)


@dataclass(frozen=True)
class RenderContext:
    """Defaults merged with caller options; built fresh for every conversion call."""
    options:       RenderOptions
    block_tags:    Mapping[str, tuple[str, ...]]
    list_tags:     Mapping[str, str]
    inline_styles: Mapping[str, StyleDescriptor]
    style_order:   tuple[str, ...]      # outer-most first


def _merge_styles(custom: Mapping[str, StyleDescriptor]) -> tuple[dict[str, StyleDescriptor], tuple[str, ...]]:
    """Merge caller descriptors over the defaults; new style names become outer-most."""
    styles = dict(DEFAULT_INLINE_STYLES)
    order = list(DEFAULT_STYLE_ORDER)
    for name, descriptor in custom.items():
        if name in styles:
            styles[name] = styles[name].model_copy(update=descriptor.model_dump(exclude_unset=True))
        else:
            styles[name] = descriptor
            order.append(name)
    return styles, tuple(reversed(order))


def build_context(options: Optional[RenderOptions] = None) -> RenderContext:
    """Resolve the effective tag mappings for a conversion call."""
    options = options or RenderOptions()
    block_tags = dict(DEFAULT_BLOCK_TAGS)
    for block_type, tags in options.block_tags.items():
        block_tags[block_type] = (tags,) if isinstance(tags, str) else tuple(tags)
    inline_styles, style_order = _merge_styles(options.inline_styles)
    return RenderContext(
        options=options,
        block_tags=MappingProxyType(block_tags),
        list_tags=MappingProxyType({**DEFAULT_LIST_TAGS, **options.list_tags}),
        inline_styles=MappingProxyType(inline_styles),
        style_order=style_order,
    )
