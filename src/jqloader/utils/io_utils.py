"""
Centralized file I/O utilities.

- Single place for encoding handling
- Module sources are read whole, data files are streamed
- Invalid UTF-8 is replaced with U+FFFD rather than raising
"""

from pathlib import Path
from typing import TextIO, Union

from .config import DEFAULT_DECODE_ERRORS, DEFAULT_FILE_ENCODING


def read_source_file(path: Union[Path, str]) -> str:
    """Read source file with standard encoding."""
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING, errors=DEFAULT_DECODE_ERRORS)


def open_data_file(path: Union[Path, str]) -> TextIO:
    """Open a data file as a text stream (caller closes it)."""
    return open(path, "r", encoding=DEFAULT_FILE_ENCODING, errors=DEFAULT_DECODE_ERRORS)
