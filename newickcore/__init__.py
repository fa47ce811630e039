"""Newick tree format parsing and formatting."""

from newickcore.exceptions import NewickError, NewickSyntaxError
from newickcore.formatter import format_length, to_newick
from newickcore.logger import configure_logging
from newickcore.parser import parse_newick, parse_newick_list
from newickcore.simple_tree import SimpleTree
from newickcore.tree import FromNewick, ToNewick

__version__ = "0.1.0"

__all__ = [
    "FromNewick",
    "ToNewick",
    "SimpleTree",
    "parse_newick",
    "parse_newick_list",
    "to_newick",
    "format_length",
    "NewickError",
    "NewickSyntaxError",
    "configure_logging",
]
