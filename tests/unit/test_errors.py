"""
Tests for loader errors and their diagnostic rendering.
"""

import json
import re

import pytest
from jqloader.frontend.parser import ParseError
from jqloader.shared.errors import (
    Error,
    JSONParseError,
    JqLoaderError,
    ModuleNotFoundError,
    QueryParseError,
    format_error,
)
from jqloader.shared.source_location import SourceLocation

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


class TestFormatError:
    """Edge cases of the diagnostic formatter"""

    def test_location_none(self):
        out = format_error(Error(message="something failed", location=None, code="E0100"), {}, color=False)
        assert "error[E0100]: something failed" in out
        assert "unknown location" in out

    def test_file_not_in_source_files(self):
        loc = SourceLocation(file="missing.jq", line=1, column=1)
        out = format_error(Error(message="oops", location=loc), {}, color=False)
        assert " --> missing.jq:1:1" in out

    def test_line_beyond_source(self):
        loc = SourceLocation(file="x.jq", line=10, column=1)
        out = format_error(Error(message="bad", location=loc), {"x.jq": "def a: 1;\n"}, color=False)
        assert "--> x.jq:10:1" in out
        assert "10 | " in out

    def test_caret_under_token_with_label_and_note(self):
        loc = SourceLocation(file="f.jq", line=1, column=15)
        err = Error(message="bad import", location=loc, label="here", note="expected ';'")
        out = format_error(err, {"f.jq": 'import "a" as a def'}, color=False)
        assert '1 | import "a" as a def' in out
        assert "  |" + " " * 15 + "^ here" in out
        assert "= note: expected ';'" in out

    def test_color_codes(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("JQLOADER_COLOR", raising=False)
        out = format_error(Error(message="m", location=None), {})
        assert "\x1b[" in out
        assert _strip_ansi(out).startswith("error: m")

    @pytest.mark.parametrize("env", [("NO_COLOR", "1"), ("JQLOADER_COLOR", "never")])
    def test_color_disabled_by_env(self, monkeypatch, env):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv(*env)
        assert "\x1b[" not in format_error(Error(message="m", location=None), {})


class TestLoaderErrors:

    def test_module_not_found(self):
        err = ModuleNotFoundError('we"ird')
        assert isinstance(err, JqLoaderError)
        assert err.name == 'we"ird'
        assert str(err) == 'module not found: "we\\"ird"'

    def test_query_parse_error(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        cause = ParseError("unexpected token ';'", "/lib/m.jq", SourceLocation("/lib/m.jq", 2, 15))
        err = QueryParseError("query in module", "/lib/m.jq", 'def a: 1;\nimport "x" as ;', cause)
        assert err.error is cause
        assert err.location.line == 2
        text = str(err)
        assert "error[E0101]: invalid query in module: /lib/m.jq" in text
        assert '2 | import "x" as ;' in text
        assert "= note: unexpected token ';'" in text

    def test_query_parse_error_without_location(self):
        err = QueryParseError("query in module", "/m.jq", "x", ValueError("boom"))
        assert err.location.line == 0
        assert "/m.jq:0:0" in err.render(color=False)
        assert "boom" in err.render(color=False)

    def test_json_parse_error(self):
        contents = '{"a":1}\n{"b":}'
        try:
            json.loads(contents[8:])
        except json.JSONDecodeError as e:
            cause = json.JSONDecodeError(e.msg, contents, 8 + e.pos)
        err = JSONParseError("/d/x.json", contents, cause)
        out = err.render(color=False)
        assert "error[E0102]: invalid json: /d/x.json" in out
        assert "--> /d/x.json:2:6" in out
        assert '2 | {"b":}' in out
        assert "^ Expecting value" in out
