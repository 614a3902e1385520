"""Conversion entry point: document model -> HTML string"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from drafthtml.core.models import Document
from drafthtml.core.options import RenderOptions, build_context
from drafthtml.core.render.document import serialize
from drafthtml.core.resolve.lists import group_blocks


logger = logging.getLogger(__name__)


def convert(
    document: Union[Document, Mapping[str, Any]],
    options: Optional[RenderOptions] = None,
    ) -> str:
    """Render a document (or a raw {"blocks", "entityMap"} mapping) as a single HTML string.

    Pure and synchronous: no I/O, no state shared between calls. Exceptions
    raised by caller hooks propagate unchanged.
    """
    if not isinstance(document, Document):
        document = Document.from_raw(document)
    context = build_context(options)
    nodes = group_blocks(document.blocks, context.list_tags, context.options.max_depth)
    logger.debug("Converting %d block(s) into %d top-level node(s)", len(document.blocks), len(nodes))
    return serialize(nodes, document, context)
