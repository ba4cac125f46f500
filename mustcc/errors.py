"""Compiler failures and parse errors."""

from __future__ import annotations

from typing import Sequence

from mustcc.common import Position
from mustcc.diagnostic import Diagnostic, Label


class InternalError(Exception):
    """A failure of the compiler itself rather than of the user's code."""


def _expected_note(expected: Sequence[str]) -> str:
    return "Expected one of:\n" + "\n".join(expected)


class ParsingError(Exception):
    """A syntax error found while parsing a source file."""

    def __init__(self, pos: Position, message: str) -> None:
        super().__init__(message)
        self.pos = pos

    def to_diagnostic(self) -> Diagnostic:
        message = str(self)
        return Diagnostic.error(self.pos).with_label(
            Label(self.pos).with_msg(lambda: message)
        )


class InvalidToken(ParsingError):
    def __init__(self, pos: Position) -> None:
        super().__init__(pos, "Invalid token")


class UnrecognizedEof(ParsingError):
    def __init__(self, pos: Position, expected: Sequence[str]) -> None:
        super().__init__(pos, "Unexpected end-of-file.")
        self.expected = list(expected)

    def to_diagnostic(self) -> Diagnostic:
        return super().to_diagnostic().with_note(_expected_note(self.expected))


class UnrecognizedToken(ParsingError):
    def __init__(self, pos: Position, token: str, expected: Sequence[str]) -> None:
        super().__init__(pos, f"Unexpected token: {token}")
        self.token = token
        self.expected = list(expected)

    def to_diagnostic(self) -> Diagnostic:
        return super().to_diagnostic().with_note(_expected_note(self.expected))


class ExtraToken(ParsingError):
    def __init__(self, pos: Position, token: str) -> None:
        super().__init__(pos, f"Unexpected token: {token}")
        self.token = token