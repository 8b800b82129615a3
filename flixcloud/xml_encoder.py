"""
Ordered mapping -> XML text.

The FlixCloud API takes a small, fixed document, so this is a plain
recursive writer rather than a DOM builder. Formatting is cosmetic;
indentation just makes ``JobRequest.final_xml`` readable when debugging.
"""

from __future__ import annotations

from html import escape
from typing import Any, Mapping

INDENT = "  "


class RawXml(str):
    """A line emitted verbatim (used for the XML prolog). Its key is ignored."""


XML_PROLOG = RawXml('<?xml version="1.0" encoding="UTF-8"?>')


def tag(name: str, content: str) -> str:
    return f"<{name}>{content}</{name}>"


def encode(document: Mapping[str, Any], level: int = 0) -> str:
    """
    Encode ``document`` in insertion order.

    - RawXml values are written as-is.
    - Mappings become nested elements; an empty mapping is dropped.
    - Leaf values are stringified and entity-escaped (& < > " ').
    - None and "" drop the tag entirely, which is how an unset
      watermark vanishes from the request.
    """
    indent = INDENT * level
    xml = ""

    for name, contents in document.items():
        if isinstance(contents, RawXml):
            xml += f"{indent}{contents}\n"
        elif isinstance(contents, Mapping):
            if not contents:
                continue
            inner = encode(contents, level + 1)
            xml += indent + tag(name, "\n" + inner + indent) + "\n"
        elif contents is not None and str(contents) != "":
            xml += indent + tag(name, escape(str(contents), quote=True)) + "\n"

    return xml
