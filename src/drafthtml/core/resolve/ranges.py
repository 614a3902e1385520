"""Overlapping style/entity ranges to contiguous styled segments"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional

from drafthtml.core.models import Block, EntityRange, InlineStyleRange, StyledSegment
from drafthtml.core.utils.offsets import utf16_index_map, utf16_span


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Span:
    start: int
    end:   int
    value: str
    order: int          # registration order within its range list
    is_entity: bool


def _valid(offset: int, length: int, text_length: int) -> bool:
    return length > 0 and offset >= 0 and offset + length <= text_length


def _collect(
    text_length: int,
    style_ranges: Iterable[InlineStyleRange],
    entity_ranges: Iterable[EntityRange],
    ) -> list[_Span]:
    spans: list[_Span] = []
    for order, r in enumerate(style_ranges):
        if _valid(r.offset, r.length, text_length):
            spans.append(_Span(r.offset, r.offset + r.length, r.style, order, False))
        else:
            logger.debug("Dropping style range %s at offset=%d length=%d", r.style, r.offset, r.length)
    for order, r in enumerate(entity_ranges):
        if _valid(r.offset, r.length, text_length):
            spans.append(_Span(r.offset, r.offset + r.length, r.key, order, True))
        else:
            logger.debug("Dropping entity range %s at offset=%d length=%d", r.key, r.offset, r.length)
    return spans


def resolve_segments(
    text_length: int,
    style_ranges: Iterable[InlineStyleRange] = (),
    entity_ranges: Iterable[EntityRange] = (),
    ) -> list[StyledSegment]:
    """Partition [0, text_length) into segments annotated with the styles and entity covering them.

    Malformed ranges (non-positive length, out of bounds) are ignored. When several
    entity ranges cover a segment, the one starting first wins, then the one
    registered first.
    """
    spans = _collect(text_length, style_ranges, entity_ranges)
    boundaries = sorted({0, text_length, *(s.start for s in spans), *(s.end for s in spans)})

    starts_at: dict[int, list[_Span]] = defaultdict(list)
    ends_at: dict[int, list[_Span]] = defaultdict(list)
    for s in spans:
        starts_at[s.start].append(s)
        ends_at[s.end].append(s)

    active_styles: Counter[str] = Counter()
    active_entities: dict[int, _Span] = {}
    segments: list[StyledSegment] = []

    for a, b in zip(boundaries, boundaries[1:]):
        for s in ends_at[a]:
            if s.is_entity:
                del active_entities[s.order]
            else:
                active_styles[s.value] -= 1
                if not active_styles[s.value]:
                    del active_styles[s.value]
        for s in starts_at[a]:
            if s.is_entity:
                active_entities[s.order] = s
            else:
                active_styles[s.value] += 1

        entity: Optional[str] = None
        if active_entities:
            entity = min(active_entities.values(), key=lambda s: (s.start, s.order)).value
        segments.append(StyledSegment(a, b, frozenset(active_styles), entity))

    return segments


def _to_codepoints(block: Block) -> tuple[list[InlineStyleRange], list[EntityRange]]:
    """Re-express a block's UTF-16 ranges as code point ranges; unaligned ranges are dropped."""
    index_map = utf16_index_map(block.text)
    styles: list[InlineStyleRange] = []
    entities: list[EntityRange] = []
    for r in block.inline_style_ranges:
        span = utf16_span(index_map, r.offset, r.length)
        if span is not None:
            styles.append(r.model_copy(update={"offset": span[0], "length": span[1]}))
    for r in block.entity_ranges:
        span = utf16_span(index_map, r.offset, r.length)
        if span is not None:
            entities.append(r.model_copy(update={"offset": span[0], "length": span[1]}))
    return styles, entities


def block_segments(block: Block, offset_unit: str = "codepoint") -> list[StyledSegment]:
    """Resolve the styled segments of a block, converting UTF-16 offsets first when asked."""
    if offset_unit == "utf16":
        styles, entities = _to_codepoints(block)
    else:
        styles, entities = block.inline_style_ranges, block.entity_ranges
    return resolve_segments(len(block.text), styles, entities)
