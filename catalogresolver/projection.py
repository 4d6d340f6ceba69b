"""Conversion between property lists and the properties annotation."""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass

PROPERTIES_ANNOTATION_KEY = "operatorframework.io/properties"

_WHITESPACE = " \t\n\r"
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Property:
    """A typed property whose value is raw JSON text."""

    type: str = ""
    value: str = ""


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid JSON literal {name}")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


def _loads(text: str):
    return json.loads(text, parse_constant=_reject_constant)


def _escape_html(text: str) -> str:
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in text)


def _compact(raw: str) -> str:
    """Validate ``raw`` as JSON and drop insignificant whitespace."""
    _loads(raw)
    out: list[str] = []
    in_string = escaped = False
    for ch in raw:
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch not in _WHITESPACE:
            out.append(ch)
            in_string = ch == '"'
    return _escape_html("".join(out))


def _encode_string(text: str) -> str:
    return _escape_html(json.dumps(text, ensure_ascii=False))


def properties_annotation_from_property_list(props: list[Property]) -> str:
    """Serialise properties into the compact annotation document.

    Raises ValueError if a property value is not valid JSON.
    """
    entries = []
    for prop in props:
        try:
            value = _compact(prop.value)
        except ValueError as exc:
            raise ValueError(f"failed to marshal properties annotation: {exc}") from exc
        entries.append(f'{{"type":{_encode_string(prop.type)},"value":{value}}}')
    if not entries:
        return "{}"
    return '{"properties":[' + ",".join(entries) + "]}"


def _skip_ws(text: str, idx: int) -> int:
    while idx < len(text) and text[idx] in _WHITESPACE:
        idx += 1
    return idx


def _object_members(text: str, idx: int) -> Iterator[tuple[str, int, int]]:
    """Yield (key, start, end) for each member of the valid object at ``idx``."""
    idx = _skip_ws(text, idx + 1)
    if text[idx] == "}":
        return
    while True:
        key, idx = _DECODER.raw_decode(text, idx)
        idx = _skip_ws(text, _skip_ws(text, idx) + 1)
        _, end = _DECODER.raw_decode(text, idx)
        yield key, idx, end
        idx = _skip_ws(text, end)
        if text[idx] != ",":
            return
        idx = _skip_ws(text, idx + 1)


def _array_elements(text: str, idx: int) -> Iterator[str]:
    """Yield the raw text of each element of the valid array at ``idx``."""
    idx = _skip_ws(text, idx + 1)
    if text[idx] == "]":
        return
    while True:
        _, end = _DECODER.raw_decode(text, idx)
        yield text[idx:end]
        idx = _skip_ws(text, end)
        if text[idx] != ",":
            return
        idx = _skip_ws(text, idx + 1)


def _property_from_text(text: str) -> Property:
    decoded = _loads(text)
    if decoded is None:
        return Property()
    if not isinstance(decoded, dict):
        raise ValueError("property entry is not an object")
    prop = Property()
    for key, start, end in _object_members(text, 0):
        folded = key.casefold()
        if folded == "type":
            type_value = _loads(text[start:end])
            if type_value is None:
                continue
            if not isinstance(type_value, str):
                raise ValueError("property type is not a string")
            prop.type = type_value
        elif folded == "value":
            prop.value = text[start:end]
    return prop


def property_list_from_properties_annotation(raw: str) -> list[Property]:
    """Parse a properties annotation, keeping each value's raw JSON text.

    Raises ValueError if the annotation is malformed.
    """
    try:
        document = _loads(raw)
        if document is None:
            return []
        if not isinstance(document, dict):
            raise ValueError("annotation is not an object")
        start = _skip_ws(raw, 0)
        span = None
        for key, member_start, member_end in _object_members(raw, start):
            if key.casefold() == "properties":
                span = (member_start, member_end)
        if span is None:
            return []
        entries_text = raw[span[0] : span[1]]
        entries = _loads(entries_text)
        if entries is None:
            return []
        if not isinstance(entries, list):
            raise ValueError("properties is not an array")
        return [_property_from_text(element) for element in _array_elements(entries_text, 0)]
    except ValueError as exc:
        raise ValueError(f"failed to unmarshal properties annotation: {exc}") from exc