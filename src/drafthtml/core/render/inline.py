"""Styled segments to a properly nested inline HTML fragment"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from itertools import groupby
from typing import Any, Mapping, Optional

from drafthtml.core.models import Block, Document, Entity, StyledSegment
from drafthtml.core.options import (
    SUPPRESSED_STYLES,
    EntityStyler,
    RenderContext,
    StyleDescriptor,
    coerce_descriptor,
)
from drafthtml.core.resolve.ranges import block_segments
from drafthtml.core.utils.markup import escape_text


logger = logging.getLogger(__name__)

_DATA_ATTRIBUTE = re.compile(r"^data-([a-z0-9-]+)$")

# Entity data keys copied onto the default element, with their attribute names.
ENTITY_ATTR_MAP: Mapping[str, Mapping[str, str]] = {
    "LINK": {
        "url": "href", "href": "href", "rel": "rel",
        "target": "target", "title": "title", "className": "class",
    },
    "IMAGE": {
        "src": "src", "height": "height", "width": "width",
        "alt": "alt", "className": "class",
    },
}
_ENTITY_ELEMENTS = {"LINK": ("a", False), "IMAGE": ("img", True)}


@dataclass(frozen=True)
class _Frame:
    key:   tuple
    open:  str
    close: str


def default_entity_descriptor(entity: Entity) -> Optional[StyleDescriptor]:
    """Default <a>/<img/> rendering for LINK and IMAGE entities; None for other types."""
    entity_type = entity.type.upper()
    if entity_type not in _ENTITY_ELEMENTS:
        return None
    attr_map = ENTITY_ATTR_MAP[entity_type]
    attrs: dict[str, Any] = {}
    for data_key, value in entity.data.items():
        if data_key in attr_map:
            attrs[attr_map[data_key]] = value
        elif _DATA_ATTRIBUTE.match(data_key):
            attrs[data_key] = value
    element, void = _ENTITY_ELEMENTS[entity_type]
    return StyleDescriptor(element=element, attributes=attrs, void=void)


def _entity_styler(entity_type: str, context: RenderContext) -> Optional[EntityStyler]:
    """Registered styler for an entity type; exact match first, then case-insensitive."""
    stylers = context.options.entity_stylers
    if entity_type in stylers:
        return stylers[entity_type]
    wanted = entity_type.upper()
    return next((fn for name, fn in stylers.items() if name.upper() == wanted), None)


def _entity_descriptor(entity: Optional[Entity], run_text: str, context: RenderContext) -> Optional[StyleDescriptor]:
    if entity is None:
        return None
    styler = _entity_styler(entity.type, context)
    if styler is not None:
        return coerce_descriptor(styler(entity, run_text))
    descriptor = default_entity_descriptor(entity)
    if descriptor is None:
        logger.debug("No renderer for entity type %s; rendering plain text", entity.type)
    return descriptor


def _encode(text: str, context: RenderContext) -> str:
    settings = context.options
    return escape_text(text, settings.escape_quotes).replace("\n", f"{settings.line_break}\n")


def preserve_whitespace(text: str) -> str:
    """Replace leading, trailing and repeated spaces with non-breaking spaces.

    Each line counts separately: spaces next to a newline are line edges too.
    """
    last = len(text) - 1
    return "".join(
        "\xa0" if c == " " and (
            i == 0 or i == last or text[i - 1] in " \n" or text[i + 1] == "\n"
        ) else c
        for i, c in enumerate(text)
    )


class _TagStack:
    """Open elements, outer-most first; transitions keep the shared prefix open."""

    def __init__(self, out: list[str]):
        self.frames: list[_Frame] = []
        self.out = out

    def transition(self, desired: list[_Frame]) -> None:
        keep = 0
        for current, wanted in zip(self.frames, desired):
            if current.key != wanted.key:
                break
            keep += 1
        while len(self.frames) > keep:
            self.out.append(self.frames.pop().close)
        for frame in desired[keep:]:
            self.out.append(frame.open)
            self.frames.append(frame)

    def close_all(self) -> None:
        self.transition([])


def _style_frames(styles: frozenset[str], skip: frozenset[str], context: RenderContext) -> list[_Frame]:
    frames = []
    for name in context.style_order:
        if name in styles and name not in skip:
            descriptor = context.inline_styles[name]
            frames.append(_Frame(("style", name), descriptor.open_tag(), descriptor.close_tag()))
    return frames


def _custom_frame(styles: frozenset[str], context: RenderContext) -> list[_Frame]:
    fn = context.options.inline_style_fn
    if fn is None:
        return []
    descriptor = coerce_descriptor(fn(styles))
    if descriptor is None:
        return []
    open_tag = descriptor.open_tag()
    return [_Frame(("custom", open_tag), open_tag, descriptor.close_tag())]


def render_segments(
    text: str,
    segments: list[StyledSegment],
    document: Document,
    context: RenderContext,
    block_type: str = "",
    ) -> str:
    """Render segments of text as HTML; tags always nest properly and are all closed."""
    display = preserve_whitespace(text) if context.options.preserve_whitespace else text
    out: list[str] = []
    stack = _TagStack(out)
    skip = SUPPRESSED_STYLES.get(block_type, frozenset())
    unknown = set()

    for run_no, (key, run) in enumerate(groupby(segments, key=lambda s: s.entity)):
        run = list(run)
        entity = document.get_entity(key)
        if key is not None and entity is None:
            logger.debug("Entity key %s missing from entity map", key)
        descriptor = _entity_descriptor(entity, text[run[0].start:run[-1].end], context)

        if descriptor is not None and descriptor.void:
            stack.close_all()
            out.append(descriptor.open_tag())
            continue

        entity_frames = []
        if descriptor is not None:
            entity_frames = [_Frame(("entity", run_no), descriptor.open_tag(), descriptor.close_tag())]

        for seg in run:
            unknown.update(seg.styles.difference(context.inline_styles))
            stack.transition(
                entity_frames
                + _custom_frame(seg.styles, context)
                + _style_frames(seg.styles, skip, context)
            )
            out.append(_encode(display[seg.start:seg.end], context))

    stack.close_all()
    if unknown:
        logger.debug("Unmapped inline styles rendered as plain text: %s", sorted(unknown))
    return "".join(out)


def render_inline(block: Block, document: Document, context: RenderContext) -> str:
    """Render a block's text with its style and entity ranges; empty text gives ''."""
    if not block.text:
        return ""
    segments = block_segments(block, context.options.offset_unit)
    return render_segments(block.text, segments, document, context, block.type)
