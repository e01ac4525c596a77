"""Concrete syntax tree, tree-sitter parser adapter and tree query helpers.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .nodes import Node, SourceTree
from .parser import dialect_for_path, parse_source

__all__ = ["Node", "SourceTree", "dialect_for_path", "parse_source"]
