"""
Model profiles of the byte-level BPE tokenizer family.

A profile pairs a vocabulary parser with the fixed special tokens and split
pattern of one published encoding. Loading a profile parses the file text
and hands ``(mergeable_ranks, special_tokens, pattern)`` to an engine.
"""

import functools
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final, Mapping

from .data_gym import data_gym_to_mergeable_bpe_ranks
from .engine import tiktoken_engine
from .pattern import SplitPattern
from .tiktoken_bpe import load_tiktoken_bpe
from .types import Engine, RankTable, VocabParser

log = logging.getLogger(__name__)

ENDOFTEXT: Final[str] = "<|endoftext|>"
FIM_PREFIX: Final[str] = "<|fim_prefix|>"
FIM_MIDDLE: Final[str] = "<|fim_middle|>"
FIM_SUFFIX: Final[str] = "<|fim_suffix|>"
ENDOFPROMPT: Final[str] = "<|endofprompt|>"

_BLOB_ROOT: Final[str] = "https://openaipublic.blob.core.windows.net"


@dataclass(frozen=True)
class ModelProfile:
    """Fixed configuration of one named encoding."""

    name: str
    parser: VocabParser
    special_tokens: Mapping[str, int] = field(default_factory=dict, hash=False)
    pattern: str = SplitPattern.LEGACY.value
    # where the vocabulary file is published; informative only
    vocab_url: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "special_tokens", MappingProxyType(dict(self.special_tokens))
        )

    def mergeable_ranks(self, model_file: str) -> RankTable:
        """Parse ``model_file`` with this profile's parser."""
        return self.parser(model_file)

    def build(self, model_file: str, engine: Engine | None = None) -> Any:
        """
        Parse ``model_file`` and construct a tokenizer with ``engine``.

        :param model_file: Text of the vocabulary file.
        :param engine: Callable taking ``(mergeable_ranks, special_tokens, pattern)``.
                       Defaults to building a :class:`tiktoken.Encoding`.
        :return: Whatever ``engine`` returns.
        :raises VocabParseError: If the vocabulary text is malformed.
        """
        if engine is None:
            engine = functools.partial(tiktoken_engine, name=self.name)

        ranks = self.mergeable_ranks(model_file)
        log.info(
            f"loaded {self.name} vocabulary: {len(ranks)} ranks, "
            f"{len(self.special_tokens)} special tokens"
        )
        # engines get their own copy so the profile stays unchanged
        return engine(ranks, dict(self.special_tokens), self.pattern)


GPT2: Final[ModelProfile] = ModelProfile(
    name="gpt2",
    parser=data_gym_to_mergeable_bpe_ranks,
    special_tokens={ENDOFTEXT: 50256},
    pattern=SplitPattern.LEGACY.value,
    vocab_url=f"{_BLOB_ROOT}/gpt-2/encodings/main/vocab.bpe",
)

R50K_BASE: Final[ModelProfile] = ModelProfile(
    name="r50k_base",
    parser=load_tiktoken_bpe,
    special_tokens={ENDOFTEXT: 50256},
    pattern=SplitPattern.LEGACY.value,
    vocab_url=f"{_BLOB_ROOT}/encodings/r50k_base.tiktoken",
)

P50K_BASE: Final[ModelProfile] = ModelProfile(
    name="p50k_base",
    parser=load_tiktoken_bpe,
    special_tokens={ENDOFTEXT: 50256},
    pattern=SplitPattern.LEGACY.value,
    vocab_url=f"{_BLOB_ROOT}/encodings/p50k_base.tiktoken",
)

# same vocabulary as p50k_base plus the fill-in-the-middle tokens
P50K_EDIT: Final[ModelProfile] = ModelProfile(
    name="p50k_edit",
    parser=load_tiktoken_bpe,
    special_tokens={
        ENDOFTEXT: 50256,
        FIM_PREFIX: 50281,
        FIM_MIDDLE: 50282,
        FIM_SUFFIX: 50283,
    },
    pattern=SplitPattern.LEGACY.value,
    vocab_url=f"{_BLOB_ROOT}/encodings/p50k_base.tiktoken",
)

CL100K_BASE: Final[ModelProfile] = ModelProfile(
    name="cl100k_base",
    parser=load_tiktoken_bpe,
    special_tokens={
        ENDOFTEXT: 50257,
        FIM_PREFIX: 50258,
        FIM_MIDDLE: 50259,
        FIM_SUFFIX: 50260,
        ENDOFPROMPT: 50276,
    },
    pattern=SplitPattern.REVISED.value,
    vocab_url=f"{_BLOB_ROOT}/encodings/cl100k_base.tiktoken",
)


def gpt2(model_file: str, engine: Engine | None = None) -> Any:
    """Load the GPT-2 encoding from the text of its data-gym ``vocab.bpe``."""
    return GPT2.build(model_file, engine)


def r50k_base(model_file: str, engine: Engine | None = None) -> Any:
    """Load ``r50k_base`` from the text of its ``.tiktoken`` file."""
    return R50K_BASE.build(model_file, engine)


def p50k_base(model_file: str, engine: Engine | None = None) -> Any:
    """Load ``p50k_base`` from the text of its ``.tiktoken`` file."""
    return P50K_BASE.build(model_file, engine)


def p50k_edit(model_file: str, engine: Engine | None = None) -> Any:
    """Load ``p50k_edit`` from the text of the ``p50k_base.tiktoken`` file."""
    return P50K_EDIT.build(model_file, engine)


def cl100k_base(model_file: str, engine: Engine | None = None) -> Any:
    """Load ``cl100k_base`` from the text of its ``.tiktoken`` file."""
    return CL100K_BASE.build(model_file, engine)
