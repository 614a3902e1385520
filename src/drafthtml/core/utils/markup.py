"""HTML escaping, attribute stringification and inline CSS helpers"""

import re
from typing import Any, Mapping, Optional


ATTR_NAME_MAP = {
    "className": "class",
    "htmlFor":   "for",
    "acceptCharset": "accept-charset",
    "httpEquiv": "http-equiv",
}

# CSS properties whose numeric values are not given a px unit.
UNITLESS_PROPERTIES = frozenset({
    "animationIterationCount", "columnCount", "columns", "fillOpacity", "flex",
    "flexGrow", "flexShrink", "fontWeight", "gridColumn", "gridRow", "lineClamp",
    "lineHeight", "opacity", "order", "orphans", "strokeOpacity", "strokeWidth",
    "tabSize", "widows", "zIndex", "zoom",
})

_UPPER_RE = re.compile(r"([A-Z])")


def escape_text(text: str, escape_quotes: bool = False) -> str:
    """Escape markup-unsafe characters in text content; non-breaking spaces become &nbsp;."""
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if escape_quotes:
        text = text.replace('"', "&quot;")
    return text.replace("\xa0", "&nbsp;")


def escape_attr(value: str) -> str:
    """Escape an HTML attribute value."""
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _css_name(name: str) -> str:
    if name.startswith("--"):
        return name
    css = _UPPER_RE.sub(r"-\1", name).lower()
    return f"-{css}" if css.startswith("ms-") else css


def _css_value(name: str, value: Any) -> str:
    if isinstance(value, (int, float)) and value != 0 and name not in UNITLESS_PROPERTIES:
        return f"{value}px"
    return str(value).strip()


def style_to_css(style: Mapping[str, Any]) -> str:
    """Render a camelCase style mapping as a CSS declaration list ("text-align: left; margin: 2px")."""
    parts = []
    for name, value in style.items():
        if value is None or isinstance(value, bool) or value == "":
            continue
        parts.append(f"{_css_name(name)}: {_css_value(name, value)}")
    return "; ".join(parts)


def normalize_attributes(attributes: Optional[Mapping[str, Any]]) -> Optional[dict[str, Any]]:
    """Map React-style attribute names (className, htmlFor) to their HTML names."""
    if attributes is None:
        return None
    return {ATTR_NAME_MAP.get(name, name): value for name, value in attributes.items()}


def stringify_attrs(attributes: Optional[Mapping[str, Any]]) -> str:
    """Return ' name="value"' pairs for every attribute whose value is not None."""
    if not attributes:
        return ""
    parts = []
    for name, value in attributes.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        parts.append(f' {name}="{escape_attr(str(value))}"')
    return "".join(parts)
