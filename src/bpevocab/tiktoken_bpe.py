"""
Reader and writer for the compact ``*.tiktoken`` vocabulary format.

Each non-empty line is ``<base64 token bytes> <decimal rank>``.
"""

import base64
import binascii
import logging
from typing import Final

import regex as re

from ._decorators import measure_time
from .errors import InvalidBase64Error, InvalidRankError, MissingSeparatorError
from .types import RankTable

log = logging.getLogger(__name__)

_RANK_RE = re.compile(r"\+?[0-9]+")
# largest rank a 64-bit engine index can hold
MAX_RANK: Final[int] = 2**64 - 1


@measure_time
def load_tiktoken_bpe(contents: str) -> RankTable:
    """
    Parse the text of a ``*.tiktoken`` file into a rank table.

    Lines are handled in file order and the first malformed one aborts the
    whole load. When a token appears twice, the later rank wins.

    :param contents: Full text of the vocabulary file.
    :return: Mapping from token bytes to rank.
    :raises MissingSeparatorError: If a line has no space.
    :raises InvalidBase64Error: If the token field is not valid, canonical base64.
    :raises InvalidRankError: If the rank field is not a decimal integer below 2**64.

    .. code-block:: python

        ranks = load_tiktoken_bpe("QQ== 0\\nQg== 1\\n")
        assert ranks == {b"A": 0, b"B": 1}
    """
    ranks: RankTable = {}

    for line_no, line in enumerate(contents.split("\n"), start=1):
        if not line:
            continue

        token, sep, rank = line.partition(" ")
        if not sep:
            raise MissingSeparatorError("no space in vocab line", line_no=line_no, line=line)

        try:
            # validate rejects characters outside the base64 alphabet
            token_bytes = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidBase64Error(
                "token field is not valid base64", line_no=line_no, line=line
            ) from e

        # leftover bits of the last symbol must be zero
        if base64.b64encode(token_bytes) != token.encode("ascii"):
            raise InvalidBase64Error(
                "token field is not canonical base64", line_no=line_no, line=line
            )

        if not _RANK_RE.fullmatch(rank) or int(rank) > MAX_RANK:
            raise InvalidRankError(
                "rank field is not an unsigned 64-bit decimal integer", line_no=line_no, line=line
            )

        ranks[token_bytes] = int(rank)

    log.debug(f"loaded {len(ranks)} tokens from tiktoken vocab")
    return ranks


def dump_tiktoken_bpe(ranks: RankTable) -> str:
    """
    Serialize a rank table to the ``*.tiktoken`` format.

    Entries are written in rank order so the output is deterministic.
    """
    lines = [
        f"{base64.b64encode(token).decode('ascii')} {rank}\n"
        for token, rank in sorted(ranks.items(), key=lambda item: item[1])
    ]
    return "".join(lines)
