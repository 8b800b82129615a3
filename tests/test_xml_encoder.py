"""Tests for the XML encoder."""

import xml.etree.ElementTree as ET

from flixcloud.xml_encoder import XML_PROLOG, RawXml, encode


def test_leaf_round_trips_through_a_parser():
    xml = encode({"api-request": {"api-key": "abc", "recipe-id": 99}})
    root = ET.fromstring(xml)
    assert root.tag == "api-request"
    assert root.findtext("api-key") == "abc"
    assert root.findtext("recipe-id") == "99"


def test_special_characters_survive_reparse():
    value = 'Tom & Jerry <live> "quoted" it\'s'
    xml = encode({"doc": {"name": value}})
    assert "&amp;" in xml and "&lt;" in xml and "&gt;" in xml
    assert ET.fromstring(xml).findtext("name") == value


def test_empty_and_none_values_drop_the_tag():
    xml = encode({"file-locations": {"input": {"url": "http://a"}, "watermark": None, "note": ""}})
    assert "<watermark>" not in xml
    assert "<note>" not in xml
    assert "<input>" in xml


def test_empty_mapping_is_dropped():
    xml = encode({"root": {"child": {}, "leaf": "x"}})
    assert "<child>" not in xml


def test_raw_lines_are_written_verbatim_and_indented_output():
    xml = encode({"prolog": XML_PROLOG, "a": {"b": {"c": "1"}}})
    assert xml == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<a>\n"
        "  <b>\n"
        "    <c>1</c>\n"
        "  </b>\n"
        "</a>\n"
    )


def test_raw_value_is_not_escaped():
    xml = encode({"x": RawXml("<!-- keep & me -->")})
    assert xml == "<!-- keep & me -->\n"


def test_order_is_preserved():
    xml = encode({"r": {"z": "1", "a": "2", "m": "3"}})
    assert xml.index("<z>") < xml.index("<a>") < xml.index("<m>")
