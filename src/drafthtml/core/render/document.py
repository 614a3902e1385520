"""Depth-first serialization of the block tree, with optional pretty printing"""

from __future__ import annotations

from drafthtml.core.models import BlockNode, Document, LeafNode, ListNode
from drafthtml.core.options import RenderContext
from drafthtml.core.render.blocks import render_block


Line = tuple[int, str]      # (indent level, markup)


def _item_lines(
    leaf: LeafNode,
    nested: list[ListNode],
    document: Document,
    context: RenderContext,
    level: int,
    ) -> list[Line]:
    """A list item; lists nested under it go inside its element, before the closing tag."""
    rendered = render_block(leaf.block, document, context, list_item=True)
    if not nested or rendered.custom:
        lines = [(level, rendered.html)]
        for node in nested:
            lines += _list_lines(node, document, context, level)
        return lines

    lines = [(level, rendered.start + rendered.content)]
    for node in nested:
        lines += _list_lines(node, document, context, level + 1)
    lines.append((level, rendered.end))
    return lines


def _list_lines(node: ListNode, document: Document, context: RenderContext, level: int) -> list[Line]:
    tag = context.list_tags[node.list_type]
    lines = [(level, f"<{tag}>")]
    children = node.children
    i = 0
    while i < len(children):
        child = children[i]
        i += 1
        if isinstance(child, ListNode):
            # Nested list with no preceding item at this level.
            lines += _list_lines(child, document, context, level + 1)
            continue
        nested = []
        while i < len(children) and isinstance(children[i], ListNode):
            nested.append(children[i])
            i += 1
        lines += _item_lines(child, nested, document, context, level + 1)
    lines.append((level, f"</{tag}>"))
    return lines


def node_lines(nodes: list[BlockNode], document: Document, context: RenderContext) -> list[Line]:
    """Flatten the block tree into (indent level, markup) pairs in document order."""
    lines: list[Line] = []
    for node in nodes:
        if isinstance(node, ListNode):
            lines += _list_lines(node, document, context, 0)
        else:
            lines.append((0, render_block(node.block, document, context).html))
    return lines


def serialize(nodes: list[BlockNode], document: Document, context: RenderContext) -> str:
    """Join rendered nodes; pretty printing puts each on its own indented line."""
    lines = node_lines(nodes, document, context)
    settings = context.options
    if not settings.pretty_print:
        return "".join(markup for _, markup in lines)
    indent = " " * settings.indent_width
    return "\n".join(f"{indent * level}{markup}" for level, markup in lines)
