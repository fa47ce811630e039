"""
Newick format parser.

This module provides the grammar rules that turn Newick text into trees of
any type implementing the ``FromNewick`` build capability.
"""

from .newick_parser import (
    parse_newick,
    parse_newick_list,
    skip_whitespace,
    read_name,
    read_quoted_name,
    read_bare_name,
    read_length,
)

__all__ = [
    "parse_newick",
    "parse_newick_list",
    "skip_whitespace",
    "read_name",
    "read_quoted_name",
    "read_bare_name",
    "read_length",
]
