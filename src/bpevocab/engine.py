"""Default tokenizer engine backed by tiktoken."""

import logging

import tiktoken

from .types import RankTable, SpecialTokens

log = logging.getLogger(__name__)


def tiktoken_engine(
    mergeable_ranks: RankTable,
    special_tokens: SpecialTokens,
    pat_str: str,
    *,
    name: str = "bpevocab",
) -> tiktoken.Encoding:
    """
    Build a :class:`tiktoken.Encoding` from a loaded vocabulary.

    Construction errors raised by tiktoken are not caught.
    """
    log.debug(
        f"building tiktoken encoding {name!r}: {len(mergeable_ranks)} ranks, "
        f"{len(special_tokens)} special tokens"
    )
    return tiktoken.Encoding(
        name,
        pat_str=pat_str,
        mergeable_ranks=mergeable_ranks,
        special_tokens=special_tokens,
    )
