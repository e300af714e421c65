"""
Error Reporting

Loader errors and rustc-style rendering of the file they point into.
"""

import json
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

from .source_location import SourceLocation


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("JQLOADER_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Error dataclass
# ---------------------------------------------------------------------------

@dataclass
class Error:
    """Single renderable diagnostic."""
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None
    note: Optional[str] = None
    label: Optional[str] = None


# ---------------------------------------------------------------------------
# Formatting engine
# ---------------------------------------------------------------------------

def _format_diagnostic(
    error: Error,
    source_files: Dict[str, str],
    color: bool = False,
) -> str:
    """
    Render a single diagnostic in rustc style.

    Example output (plain, no color)::

        error[E0101]: invalid query in module
         --> /lib/util.jq:2:8
          |
        2 | import lib as x;
          |        ^^^ unexpected token
    """
    out: List[str] = []

    code_str = f"[{error.code}]" if error.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    if error.location is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    loc = error.location
    source = source_files.get(loc.file)
    if source is None or loc.line <= 0:
        out.append(
            _style(" --> ", _BOLD, _BLUE, color=color)
            + f"{loc.file}:{loc.line}:{loc.column}"
        )
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    src_lines = source.split("\n")
    gw = max(len(str(loc.line)), 1)
    gutter = _style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color)

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + str(loc))
    out.append(gutter)

    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)

    col_start = max(loc.column, 1) - 1
    if loc.end_line in (0, loc.line) and loc.end_column > loc.column:
        span_len = loc.end_column - loc.column
    else:
        span_len = _guess_span(code_line, col_start)
    carets = " " * col_start + "^" * max(1, span_len)
    label_suffix = f" {error.label}" if error.label else ""
    out.append(
        _style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color)
        + _style(carets + label_suffix, _BOLD, _RED, color=color)
    )

    _append_annotations(out, error, gw, color)
    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length when end_column is unavailable."""
    if col_start >= len(code_line):
        return 1
    length = 0
    for ch in code_line[col_start:]:
        if ch in (" ", "\t", ";", ",", ")", "]", "}"):
            break
        length += 1
    return max(1, length)


def _append_annotations(
    out: List[str],
    error: Error,
    gw: int,
    color: bool,
) -> None:
    if not (error.help or error.note):
        return
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    pad = " " * (gw + 1)
    if error.help:
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("help: ", _BOLD, color=color)
            + error.help
        )
    if error.note:
        out.append(
            _style(f"{pad}= ", _BOLD, _CYAN, color=color)
            + _style("note: ", _BOLD, color=color)
            + error.note
        )


def format_error(error: Error, source_files: Dict[str, str], color: Optional[bool] = None) -> str:
    use_color = color if color is not None else _use_color()
    return _format_diagnostic(error, source_files, color=use_color)


# ============================================================================
# Exception Classes
# ============================================================================

class JqLoaderError(Exception):
    """Base exception for all loader errors"""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message}\n --> {self.location}"
        return self.message


class ModuleNotFoundError(JqLoaderError):
    """No candidate file exists for a module name on any search root"""
    def __init__(self, name: str):
        super().__init__(f"module not found: {json.dumps(name, ensure_ascii=False)}")
        self.name = name


class JqSourceError(JqLoaderError):
    """
    Error inside a module or data file.

    Carries the full text of the file so the error can be rendered with the
    offending line underneath the message.
    """
    error_code = "E0100"

    def __init__(self,
                 message: str,
                 path: str,
                 contents: str,
                 location: Optional[SourceLocation] = None,
                 help: Optional[str] = None,
                 note: Optional[str] = None,
                 label: Optional[str] = None):
        super().__init__(message, location)
        self.path = path
        self.contents = contents
        self.help_text = help
        self.note_text = note
        self.label_text = label

    def diagnostic(self) -> Error:
        return Error(
            message=self.message,
            location=self.location,
            code=self.error_code,
            help=self.help_text,
            note=self.note_text,
            label=self.label_text,
        )

    def render(self, color: Optional[bool] = None) -> str:
        return format_error(self.diagnostic(), {self.path: self.contents}, color=color)

    def __str__(self):
        return self.render()


class QueryParseError(JqSourceError):
    """Module source that the header parser rejected"""
    error_code = "E0101"

    def __init__(self, kind: str, path: str, contents: str, error: Exception):
        location = getattr(error, "location", None)
        if location is None:
            location = SourceLocation(file=path, line=0, column=0)
        super().__init__(
            f"invalid {kind}: {path}",
            path,
            contents,
            location=location,
            note=getattr(error, "message", None) or str(error),
        )
        self.kind = kind
        self.error = error


class JSONParseError(JqSourceError):
    """Data file that is not a sequence of JSON values"""
    error_code = "E0102"

    def __init__(self, path: str, contents: str, error: json.JSONDecodeError):
        super().__init__(
            f"invalid json: {path}",
            path,
            contents,
            location=SourceLocation(file=path, line=error.lineno, column=error.colno),
            label=error.msg,
        )
        self.error = error
