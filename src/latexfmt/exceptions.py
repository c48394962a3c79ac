#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the latexfmt library.

This module defines the exception classes raised while parsing LaTeX
source, building and printing syntax trees, and running the command line
tool. Catching :class:`LatexFmtError` catches every library-specific error.

Exception Hierarchy
-------------------
- LatexFmtError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a renderer)

  - FileError (file access and I/O)

  - ParsingError (input parsing failures)
    - LatexSyntaxError (input does not match the grammar)

  - RenderingError (output generation failures)
    - MalformedNodeError (tree outside the closed node set)

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SourceLocation:
    """Position of a character in the parsed source.

    Parameters
    ----------
    line : int
        1-based line number
    column : int
        1-based column number
    offset : int
        0-based character offset from the start of the source

    """

    line: int
    column: int
    offset: int

    @classmethod
    def from_offset(cls, text: str, offset: int) -> "SourceLocation":
        """Compute the line and column of ``offset`` within ``text``.

        ``\\r\\n``, ``\\r`` and ``\\n`` each count as one line break.
        """
        line = 1
        column = 1
        index = 0
        while index < offset:
            char = text[index]
            if char == "\n":
                line += 1
                column = 1
            elif char == "\r":
                if index + 1 < offset and text[index + 1] == "\n":
                    index += 1
                line += 1
                column = 1
            else:
                column += 1
            index += 1
        return cls(line=line, column=column, offset=offset)


class LatexFmtError(Exception):
    """Base exception class for all latexfmt-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(LatexFmtError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a renderer receives the wrong options class.

    Parameters
    ----------
    message : str
        Description of the error
    expected_type : type, optional
        The options class the renderer accepts
    received_type : type, optional
        The options class that was provided

    """

    def __init__(
        self,
        message: str,
        expected_type: type | None = None,
        received_type: type | None = None,
    ):
        """Initialize with the expected and received option types."""
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(LatexFmtError):
    """Exception raised when a source file cannot be read or written.

    Parameters
    ----------
    message : str
        Description of the I/O failure
    file_path : str, optional
        Path of the offending file
    original_error : Exception, optional
        The underlying ``OSError``

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with the offending path."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class ParsingError(LatexFmtError):
    """Exception raised when input cannot be parsed."""


class LatexSyntaxError(ParsingError):
    """The input cannot be derived from the LaTeX grammar.

    Raised for unbalanced braces, unterminated math, mismatched
    ``\\begin``/``\\end`` names and any trailing input the grammar cannot
    consume. The error describes the furthest position the parser reached.

    Parameters
    ----------
    message : str
        Human-readable diagnostic
    expected : list of str
        Descriptions of everything that was tried at the failure position
    found : str or None
        The character found there, or None at end of input
    location : SourceLocation
        Where the failure occurred

    """

    def __init__(self, message: str, expected: list[str], found: str | None, location: SourceLocation):
        """Initialize the syntax error with its diagnostic details."""
        super().__init__(message)
        self.expected = expected
        self.found = found
        self.location = location

    def __str__(self) -> str:
        """Prefix the message with the line and column."""
        return f"line {self.location.line}, column {self.location.column}: {self.message}"


class RenderingError(LatexFmtError):
    """Exception raised when a tree cannot be rendered."""


class MalformedNodeError(RenderingError):
    """A tree contains a value outside the closed set of node types.

    This indicates a hand-built or corrupted tree rather than bad input and
    is not meant to be recovered from.

    Parameters
    ----------
    message : str
        Description of the problem
    node : any, optional
        The offending value

    """

    def __init__(self, message: str, node: Any = None):
        """Initialize with the offending value."""
        super().__init__(message)
        self.node = node


__all__ = [
    "SourceLocation",
    "LatexFmtError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "ParsingError",
    "LatexSyntaxError",
    "RenderingError",
    "MalformedNodeError",
]
