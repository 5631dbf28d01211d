"""Split patterns applied by the tokenizer engine before BPE merging."""

from enum import Enum

import regex as re

from .errors import PatternError


class SplitPattern(str, Enum):
    """
    Pre-tokenization regex patterns of the supported profiles.

    Both strings are handed verbatim to the tokenizer engine and must match
    the published encodings byte for byte.
    """

    # gpt2, r50k_base, p50k_base, p50k_edit
    LEGACY = (
        r"'s|'t|'re|'ve|'m|'ll|'d|"
        r" ?\p{L}+|"
        r" ?\p{N}+|"
        r" ?[^\s\p{L}\p{N}]+|"
        r"\s+(?!\S)|"
        r"\s+"
    )

    # cl100k_base; CR and LF inside the classes are literal characters
    REVISED = (
        r"(?i:'s|'t|'re|'ve|'m|'ll|'d)|"
        "[^\r\n" r"\p{L}\p{N}]?\p{L}+|"
        r"\p{N}{1,3}|"
        r" ?[^\s\p{L}\p{N}]+" "[\r\n]*|"
        r"\s*" "[\r\n]+|"
        r"\s+(?!\S)|"
        r"\s+"
    )

    @classmethod
    def get(cls, name: str) -> str:
        """Get patterns by name (case-insensitive)."""
        try:
            return cls[name.upper().replace("-", "_")].value
        except KeyError:
            raise PatternError(
                f"Unknown pattern: {name!r}. "
                f"Valid patterns: {', '.join(pat.name for pat in cls)}"
            )


def list_patterns() -> list[str]:
    """Return names of all available split patterns."""
    return [pat.name for pat in SplitPattern]


def compile_pattern(pattern: str) -> re.Pattern:
    """
    Compile and validate a regex pattern.

    :param pattern: Regex pattern string to compile.
    :return: Compiled regex pattern.
    :raises PatternError: If pattern is invalid.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError("invalid regex pattern", pattern=pattern, regex_err=e)
