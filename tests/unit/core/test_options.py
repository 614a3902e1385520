"""Unit tests for core/options.py"""

import pytest

from drafthtml.config import Settings
from drafthtml.core.options import (
    DEFAULT_BLOCK_TAGS,
    RenderOptions,
    StyleDescriptor,
    build_context,
    coerce_descriptor,
)


def test_default_context():
    """Without options the context carries the default mappings."""
    ctx = build_context()
    assert ctx.block_tags["header-one"] == ("h1",)
    assert ctx.block_tags["code-block"] == ("pre", "code")
    assert ctx.list_tags["ordered-list-item"] == "ol"
    assert ctx.inline_styles["ITALIC"].element == "em"
    assert ctx.style_order == ("CODE", "STRIKETHROUGH", "UNDERLINE", "ITALIC", "BOLD")


def test_block_tag_override_accepts_str_and_tuple():
    """Caller block tags extend and override the defaults."""
    ctx = build_context(RenderOptions(block_tags={"unstyled": "div", "aside": ["aside", "p"]}))
    assert ctx.block_tags["unstyled"] == ("div",)
    assert ctx.block_tags["aside"] == ("aside", "p")
    assert ctx.block_tags["header-two"] == ("h2",)


def test_defaults_not_mutated():
    """Overrides never leak into the module-level defaults."""
    build_context(RenderOptions(block_tags={"unstyled": "div"}))
    assert DEFAULT_BLOCK_TAGS["unstyled"] == ("p",)


def test_custom_style_is_outermost():
    """New style names are appended after the defaults, i.e. rendered outer-most."""
    ctx = build_context(RenderOptions(inline_styles={"HIGHLIGHT": "mark"}))
    assert ctx.style_order[0] == "HIGHLIGHT"
    assert ctx.inline_styles["HIGHLIGHT"] == StyleDescriptor(element="mark")


def test_known_style_override_merges():
    """Overriding a default style keeps unspecified fields from the default."""
    ctx = build_context(RenderOptions(inline_styles={"BOLD": {"style": {"fontWeight": 700}}}))
    bold = ctx.inline_styles["BOLD"]
    assert bold.element == "strong"
    assert bold.open_tag() == '<strong style="font-weight: 700">'


def test_from_settings():
    """RenderOptions can be built from loaded Settings plus hooks."""
    opts = RenderOptions.from_settings(Settings(pretty_print=True), block_tags={"x": "div"})
    assert opts.pretty_print is True
    assert opts.block_tags == {"x": "div"}


def test_descriptor_tags():
    """Descriptors render normalized attributes and CSS; void elements self-close."""
    d = StyleDescriptor(element="span", attributes={"className": "hl"}, style={"color": "red"})
    assert d.open_tag() == '<span class="hl" style="color: red">'
    assert d.close_tag() == "</span>"
    img = StyleDescriptor(element="img", attributes={"src": "a.png"}, void=True)
    assert (img.open_tag(), img.close_tag()) == ('<img src="a.png"/>', "")


def test_coerce_descriptor():
    """Hooks may return descriptors, mappings or None; anything else is a TypeError."""
    assert coerce_descriptor(None) is None
    assert coerce_descriptor({"element": "b"}) == StyleDescriptor(element="b")
    with pytest.raises(TypeError):
        coerce_descriptor("b")


def test_hook_must_be_callable():
    """Non-callable hooks are rejected at option construction."""
    with pytest.raises(ValueError):
        RenderOptions(block_style_fn="not callable")
