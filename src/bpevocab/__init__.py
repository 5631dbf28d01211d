"""bpevocab: vocabulary loading for byte-level BPE tokenizers."""

from .data_gym import data_gym_to_mergeable_bpe_ranks
from .engine import tiktoken_engine
from .errors import (
    InvalidBase64Error,
    InvalidRankError,
    MissingSeparatorError,
    PatternError,
    UndecodableCodePointError,
    UnknownProfileError,
    VocabError,
    VocabParseError,
)
from .factory import get_profile, list_profiles, load_encoding, load_encoding_file
from .pattern import SplitPattern, compile_pattern, list_patterns
from .profiles import (
    ModelProfile,
    cl100k_base,
    gpt2,
    p50k_base,
    p50k_edit,
    r50k_base,
)
from .tiktoken_bpe import dump_tiktoken_bpe, load_tiktoken_bpe

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bpevocab")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "ModelProfile",
    "SplitPattern",
    "VocabError",
    "VocabParseError",
    "MissingSeparatorError",
    "UndecodableCodePointError",
    "InvalidBase64Error",
    "InvalidRankError",
    "UnknownProfileError",
    "PatternError",
    "data_gym_to_mergeable_bpe_ranks",
    "load_tiktoken_bpe",
    "dump_tiktoken_bpe",
    "tiktoken_engine",
    "gpt2",
    "r50k_base",
    "p50k_base",
    "p50k_edit",
    "cl100k_base",
    "get_profile",
    "list_profiles",
    "list_patterns",
    "compile_pattern",
    "load_encoding",
    "load_encoding_file",
]
