"""Block wrapper tags, block-level attributes and custom block renderers"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from drafthtml.core.models import Block, Document
from drafthtml.core.options import RenderContext, coerce_descriptor
from drafthtml.core.render.inline import render_inline
from drafthtml.core.utils.markup import stringify_attrs


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedBlock:
    """Markup for one block split around its content so nested lists can be placed inside."""
    start:   str
    content: str
    end:     str
    custom:  bool = False

    @property
    def html(self) -> str:
        return f"{self.start}{self.content}{self.end}"


def block_tags(block_type: str, context: RenderContext, list_item: bool = False) -> tuple[str, ...]:
    """Wrapper tags for a block type, outer-most first; unknown types get the default tag.

    A list item is always wrapped in <li> first; any other mapped tags for its
    type go inside it.
    """
    tags = context.block_tags.get(block_type)
    if list_item:
        if not tags:
            return ("li",)
        return tags if tags[0] == "li" else ("li",) + tags
    if tags is None:
        logger.debug("Unknown block type %s; using <%s>", block_type, context.options.default_block_tag)
        return (context.options.default_block_tag,)
    return tags


def block_attrs(block: Block, context: RenderContext) -> str:
    """Attribute string from the caller's block_style_fn, or '' when none applies."""
    fn = context.options.block_style_fn
    if fn is None:
        return ""
    descriptor = coerce_descriptor(fn(block))
    if descriptor is None:
        return ""
    return stringify_attrs(descriptor.attrs())


def render_block(
    block: Block,
    document: Document,
    context: RenderContext,
    list_item: bool = False,
    ) -> RenderedBlock:
    """Render one block: a custom renderer's output verbatim, else wrapper tags around inline content."""
    renderer = context.options.block_renderers.get(block.type)
    if renderer is not None:
        output = renderer(block)
        if output is not None:
            return RenderedBlock(start="", content=output, end="", custom=True)

    tags = block_tags(block.type, context, list_item)
    attrs = block_attrs(block, context)
    content = render_inline(block, document, context) or context.options.empty_placeholder
    return RenderedBlock(
        start="".join(f"<{tag}{attrs}>" for tag in tags),
        content=content,
        end="".join(f"</{tag}>" for tag in reversed(tags)),
    )
