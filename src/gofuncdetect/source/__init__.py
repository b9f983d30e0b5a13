"""Reading Go source declarations with tree-sitter."""

from __future__ import annotations

from .parser import parse_source

__all__ = ["parse_source"]
