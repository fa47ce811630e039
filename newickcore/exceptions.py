"""
Custom exceptions for Newick parsing.
"""

from __future__ import annotations

from typing import Optional


class NewickError(Exception):
    """Base exception for all newickcore errors."""

    pass


class NewickSyntaxError(NewickError, ValueError):
    """Raised when the input text does not match the Newick grammar.

    The whole input is rejected; no partially built tree is ever returned.

    Attributes:
        text: The full text that was being parsed.
        position: 0-based offset of the failure inside ``text``.
        line: 1-based line number of ``position``.
        column: 1-based column number of ``position``.
        expected: Short description of what the grammar wanted at ``position``.
    """

    def __init__(
        self,
        message: str,
        text: str,
        position: int,
        expected: Optional[str] = None,
    ):
        self.message = message
        self.text = text
        self.position = position
        self.expected = expected
        self.line = text.count("\n", 0, position) + 1
        line_start = text.rfind("\n", 0, position) + 1
        self.column = position - line_start + 1
        super().__init__(self._render())

    def __reduce__(self):
        return (
            type(self),
            (self.message, self.text, self.position, self.expected),
        )

    def _render(self) -> str:
        line_start = self.text.rfind("\n", 0, self.position) + 1
        line_end = self.text.find("\n", self.position)
        if line_end == -1:
            line_end = len(self.text)
        excerpt = self.text[line_start:line_end]
        caret = " " * (self.column - 1) + "^"
        details = f"{self.message} at line {self.line}, column {self.column}"
        if self.expected:
            details += f" (expected {self.expected})"
        return f"{details}\n    {excerpt}\n    {caret}"

    @classmethod
    def at(
        cls, text: str, position: int, expected: str, message: Optional[str] = None
    ) -> "NewickSyntaxError":
        """Build an error describing what was found at ``position``."""
        if message is None:
            if position >= len(text):
                found = "end of input"
            else:
                found = repr(text[position])
            message = f"Unexpected {found}"
        return cls(message, text, position, expected)
