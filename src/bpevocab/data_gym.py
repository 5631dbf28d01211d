"""
Parser for the legacy data-gym ``vocab.bpe`` format.

The file starts with a header line (``#version: 0.2``) followed by one merge
per line, ``<left> <right>``, both halves written in data-gym characters
(see :mod:`bpevocab.remap`). The merge section ends at the first empty line.
"""

import logging

from ._decorators import measure_time
from .errors import MissingSeparatorError, UndecodableCodePointError
from .remap import build_byte_remap
from .types import RankTable

log = logging.getLogger(__name__)

# first rank handed to merged tokens, right after the 256 single bytes
MERGE_RANK_OFFSET = 256


@measure_time
def data_gym_to_mergeable_bpe_ranks(vocab_bpe: str) -> RankTable:
    """
    Rebuild the rank table of a data-gym ``vocab.bpe`` file.

    Single bytes keep the ranks given by the byte remap table; the merge on
    the ``i``-th line after the header gets rank ``256 + i``.

    :param vocab_bpe: Full text of the ``vocab.bpe`` file.
    :return: Mapping from token bytes to rank.
    :raises MissingSeparatorError: If a merge line has no space.
    :raises UndecodableCodePointError: If a merge line holds a character outside
                                       the byte remap table.
    """
    remap = build_byte_remap()
    bpe_ranks = remap.base_ranks()

    n_merges = 0
    lines = vocab_bpe.split("\n")
    # header line is skipped; stop at first blank line or end of input
    for i, line in enumerate(lines[1:]):
        if not line:
            break

        # header is line 1 of the file
        line_no = i + 2
        left, sep, right = line.partition(" ")
        if not sep:
            raise MissingSeparatorError("no space in merge line", line_no=line_no, line=line)

        try:
            key = remap.decode(left) + remap.decode(right)
        except UndecodableCodePointError as e:
            raise UndecodableCodePointError(
                "character not in byte remap table", char=e.char, line_no=line_no, line=line
            ) from e

        bpe_ranks[key] = MERGE_RANK_OFFSET + i
        n_merges += 1

    log.debug(f"loaded {n_merges} merges from data-gym vocab")
    return bpe_ranks
