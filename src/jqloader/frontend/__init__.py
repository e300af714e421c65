"""Front end: module header grammar and parser."""

from .parser import Parser, ParseError

__all__ = ["Parser", "ParseError"]
