from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Dict


class XmlReadError(ValueError):
    """Raised when a body that should be XML cannot be parsed."""


def read_fields(body: bytes | str | None) -> Dict[str, str]:
    """
    Parse ``body`` and return the root element's children as a flat
    ``{tag: text}`` mapping.

    This is the only place that reaches into parsed XML by tag name; callers
    use ``fields.get(name, "")`` so absent fields read as empty strings.
    Nested children are flattened to their concatenated text.
    """
    if body is None or (isinstance(body, (bytes, str)) and not body.strip()):
        raise XmlReadError("empty body")

    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise XmlReadError(str(e)) from e

    fields: Dict[str, str] = {}
    for child in root:
        fields[child.tag] = "".join(child.itertext())
    return fields
