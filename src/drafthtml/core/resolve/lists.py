"""Flat block sequence to a tree of nested list containers"""

from __future__ import annotations

from typing import Iterable, Mapping

from drafthtml.core.models import Block, BlockNode, LeafNode, ListNode


def group_blocks(
    blocks: Iterable[Block],
    list_tags: Mapping[str, str],
    max_depth: int,
    ) -> list[BlockNode]:
    """Group consecutive list-item blocks into nested ListNodes; other blocks stay top-level leaves.

    A block is a list item when its type is a key of list_tags. Depths above
    max_depth are treated as max_depth. A change of list type at the same depth
    starts a new container.
    """
    root: list[BlockNode] = []
    stack: list[ListNode] = []

    for block in blocks:
        if block.type not in list_tags:
            stack.clear()
            root.append(LeafNode(block))
            continue

        depth = min(block.depth, max_depth)
        while stack and stack[-1].depth > depth:
            stack.pop()
        if stack and stack[-1].depth == depth and stack[-1].list_type != block.type:
            stack.pop()

        while not stack or stack[-1].depth < depth:
            level = stack[-1].depth + 1 if stack else 0
            container = ListNode(list_type=block.type, depth=level)
            (stack[-1].children if stack else root).append(container)
            stack.append(container)

        stack[-1].children.append(LeafNode(block))

    return root
