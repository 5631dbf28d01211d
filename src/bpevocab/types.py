"""
Core types for vocabulary loading.
"""

from typing import Any, Callable

type Rank = int
type TokenBytes = bytes
type RankTable = dict[TokenBytes, Rank]
type SpecialTokens = dict[str, Rank]
type VocabParser = Callable[[str], RankTable]
type Engine = Callable[[RankTable, SpecialTokens, str], Any]
