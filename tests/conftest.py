"""Root test configuration: shared document builders and render context"""

import pytest

from drafthtml.core.models import Block, Document
from drafthtml.core.options import RenderOptions, build_context


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory with no DRAFTHTML_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in RenderOptions.model_fields:
        monkeypatch.delenv(f"DRAFTHTML_{name.upper()}", raising=False)


@pytest.fixture(name="context")
def context_fixture():
    """Render context with default mappings and settings."""
    return build_context()


@pytest.fixture(name="make_doc")
def make_doc_fixture():
    """Build a Document from block dicts (raw editor keys) and an optional entity map."""
    def _make(*blocks: dict, entity_map: dict = None) -> Document:
        return Document.from_raw({"blocks": list(blocks), "entityMap": entity_map or {}})
    return _make


@pytest.fixture(name="block")
def block_fixture():
    """Single 'Hello world.' header block with ITALIC over 'world'."""
    return Block.model_validate({
        "key": "dn025",
        "text": "Hello world.",
        "type": "header-one",
        "depth": 0,
        "inlineStyleRanges": [{"offset": 6, "length": 5, "style": "ITALIC"}],
        "entityRanges": [],
    })
