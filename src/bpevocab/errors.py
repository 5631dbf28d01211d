"""Custom exception hierarchy for bpevocab loading errors."""

import regex as re

from ._sanitise import render_char


class VocabError(Exception):
    """Base exception for all bpevocab errors."""


class VocabParseError(VocabError):
    """Raised when a line of a vocabulary file cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        line_no: int | None = None,
        line: str | None = None,
    ) -> None:
        """Initialize with optional line context that gets appended to the message."""
        extra = " "
        if line_no is not None:
            extra += f"(line: {line_no}) "
        if line is not None:
            extra += f"(content: {line!r}) "
        super().__init__(message + extra)
        self.line_no = line_no
        self.line = line


class MissingSeparatorError(VocabParseError):
    """Raised when a line lacks the space between its two fields."""


class UndecodableCodePointError(VocabParseError):
    """Raised when a data-gym string holds a character outside the byte remap table."""

    def __init__(
        self,
        message: str,
        *,
        char: str,
        line_no: int | None = None,
        line: str | None = None,
    ) -> None:
        # code point goes first so the message stays readable for long lines
        message = f"{message} (char: {render_char(char)} U+{ord(char):04X})"
        super().__init__(message, line_no=line_no, line=line)
        self.char = char


class InvalidBase64Error(VocabParseError):
    """Raised when the token field of a tiktoken line is not valid base64."""


class InvalidRankError(VocabParseError):
    """Raised when the rank field of a tiktoken line is not a decimal integer."""


class UnknownProfileError(VocabError):
    """Raised when a model profile name is not registered."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available}) (got {invalid_name}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available = available


class PatternError(VocabError):
    """Raised when looking up or compiling a split pattern fails."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        regex_err: re.error | None = None,
    ) -> None:
        """
        Initialize PatternError with pattern details.

        Args:
            message: Error message.
            pattern: The regex pattern that failed.
            regex_err: The underlying regex error from the regex library.
        """
        extra = " "
        if pattern:
            extra += f"(pattern: {pattern!r}) "
        if regex_err:
            extra += f"(reason: {regex_err}) "
        super().__init__(message + extra)
        self.pattern = pattern
        self.regex_err = regex_err
