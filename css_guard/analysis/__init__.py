"""Tokenizer, structural parser and the pure analysis sub-routines."""

from .parser import StructuralParser, parse_stylesheet
from .stylesheet import Stylesheet
from .tokenizer import Tokenizer

__all__ = ["StructuralParser", "Stylesheet", "Tokenizer", "parse_stylesheet"]
