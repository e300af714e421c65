"""
JSON Stream Decoding

Decodes a text stream holding any number of concatenated JSON values
(``{"a":1}\\n{"b":2}``, JSON lines, or nothing at all) one value at a time.
"""

import json
import re
from json.decoder import WHITESPACE
from typing import Any, Iterator, TextIO


# String literals are matched whole so a constant is only found outside them
_CONSTANT = re.compile(r'"(?:[^"\\]|\\.)*"|(-?Infinity|NaN)', re.DOTALL)


def _constant_position(text: str, pos: int) -> int:
    for m in _CONSTANT.finditer(text, pos):
        if m.group(1):
            return m.start(1)
    return pos


class _NonJSONConstant(ValueError):
    """NaN, Infinity or -Infinity, which Python's json accepts and JSON does not"""


def _reject_constant(name: str) -> Any:
    raise _NonJSONConstant(name)


class JSONStreamDecoder:
    """
    Iterate the JSON values of a stream in order.

    The stream is read to the end once, then decoded value by value. The
    text is kept in ``consumed`` so that a decode error can be shown with
    the text leading up to it. Errors are raised as ``json.JSONDecodeError``
    with line/column relative to the whole stream.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.decoder = json.JSONDecoder(parse_constant=_reject_constant)
        self.consumed = ""

    def __iter__(self) -> Iterator[Any]:
        self.consumed = self.stream.read()
        text = self.consumed
        pos = WHITESPACE.match(text, 0).end()
        while pos < len(text):
            try:
                value, end = self.decoder.raw_decode(text, pos)
            except _NonJSONConstant:
                raise json.JSONDecodeError("Expecting value", text, _constant_position(text, pos)) from None
            yield value
            pos = WHITESPACE.match(text, end).end()
