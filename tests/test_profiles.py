"""Unit tests for model profiles, the profile registry and engine hand-off."""

from concurrent.futures import ThreadPoolExecutor

import pytest
import tiktoken

import bpevocab as bv
from bpevocab.errors import (
    InvalidRankError,
    UndecodableCodePointError,
    UnknownProfileError,
)
from bpevocab.pattern import SplitPattern
from bpevocab.profiles import CL100K_BASE, P50K_EDIT


# Special tokens and patterns
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("name", ["gpt2", "r50k_base", "p50k_base"])
def test_base_profiles_have_endoftext_only(name):
    """Older base profiles reserve only end-of-text at 50256."""
    profile = bv.get_profile(name)
    assert dict(profile.special_tokens) == {"<|endoftext|>": 50256}
    assert profile.pattern == SplitPattern.LEGACY.value


def test_p50k_edit_special_tokens():
    """Edit profile has exactly four special tokens."""
    assert dict(P50K_EDIT.special_tokens) == {
        "<|endoftext|>": 50256,
        "<|fim_prefix|>": 50281,
        "<|fim_middle|>": 50282,
        "<|fim_suffix|>": 50283,
    }
    assert P50K_EDIT.pattern == SplitPattern.LEGACY.value


def test_cl100k_special_tokens():
    """cl100k_base has exactly five special tokens and the revised pattern."""
    assert dict(CL100K_BASE.special_tokens) == {
        "<|endoftext|>": 50257,
        "<|fim_prefix|>": 50258,
        "<|fim_middle|>": 50259,
        "<|fim_suffix|>": 50260,
        "<|endofprompt|>": 50276,
    }
    assert CL100K_BASE.pattern == SplitPattern.REVISED.value


def test_profile_special_tokens_are_read_only():
    """Profiles cannot be mutated through their special token table."""
    with pytest.raises(TypeError):
        CL100K_BASE.special_tokens["<|new|>"] = 1


def test_profiles_are_hashable():
    """Profiles can be used as dict keys and set members."""
    assert hash(CL100K_BASE) == hash(CL100K_BASE)
    assert len({P50K_EDIT, CL100K_BASE, bv.get_profile("p50k_edit")}) == 2


# Loaders
# ---------------------------------------------------------------------------


def test_gpt2_uses_legacy_parser(recording_engine, legacy_vocab):
    """gpt2 parses data-gym text and passes the triple to the engine."""
    built = bv.gpt2(legacy_vocab, engine=recording_engine)
    assert built is recording_engine.calls[0]
    assert built.mergeable_ranks[b"abc"] == 257
    assert built.special_tokens == {"<|endoftext|>": 50256}
    assert built.pat_str == SplitPattern.LEGACY.value


@pytest.mark.parametrize(
    "loader", [bv.r50k_base, bv.p50k_base, bv.p50k_edit, bv.cl100k_base]
)
def test_compact_profiles_use_tiktoken_parser(loader, recording_engine):
    """Compact profiles read base64 lines."""
    built = loader("QQ== 0\nQg== 1\n", engine=recording_engine)
    assert built.mergeable_ranks == {b"A": 0, b"B": 1}


def test_edit_and_base_share_ranks(recording_engine, compact_vocab):
    """Same file gives identical ranks; special tokens differ by three."""
    base = bv.p50k_base(compact_vocab, engine=recording_engine)
    edit = bv.p50k_edit(compact_vocab, engine=recording_engine)
    assert base.mergeable_ranks == edit.mergeable_ranks
    assert base.mergeable_ranks is not edit.mergeable_ranks
    diff = set(edit.special_tokens.items()) ^ set(base.special_tokens.items())
    assert len(diff) == 3


def test_engine_gets_its_own_special_tokens(recording_engine, compact_vocab):
    """Engines may mutate what they receive without touching the profile."""
    built = bv.cl100k_base(compact_vocab, engine=recording_engine)
    built.special_tokens["<|new|>"] = 1
    assert "<|new|>" not in CL100K_BASE.special_tokens


def test_parse_error_propagates_before_engine(recording_engine):
    """Malformed vocab raises and the engine is never called."""
    with pytest.raises(InvalidRankError):
        bv.r50k_base("QQ== zero\n", engine=recording_engine)
    with pytest.raises(UndecodableCodePointError):
        bv.gpt2("#version: 0.2\na  b\n", engine=recording_engine)
    assert recording_engine.calls == []


def test_engine_error_propagates_unchanged(compact_vocab):
    """Engine failures are not wrapped."""

    class EngineFailure(Exception):
        pass

    def failing_engine(mergeable_ranks, special_tokens, pat_str):
        raise EngineFailure("inconsistent ranks")

    with pytest.raises(EngineFailure, match="inconsistent ranks"):
        bv.p50k_base(compact_vocab, engine=failing_engine)


def test_default_engine_builds_tiktoken_encoding(legacy_vocab):
    """Without an engine a working tiktoken encoding is returned."""
    enc = bv.gpt2(legacy_vocab)
    assert isinstance(enc, tiktoken.Encoding)
    assert enc.name == "gpt2"
    assert enc.encode("abc") == [257]
    assert enc.decode([257, 256]) == "abcab"
    assert enc.encode("<|endoftext|>", allowed_special="all") == [50256]


def test_concurrent_loads_are_independent(compact_vocab):
    """Parallel loads on separate threads give equal, separate tables."""
    with ThreadPoolExecutor(max_workers=4) as pool:
        parse = bv.get_profile("r50k_base").mergeable_ranks
        tables = list(pool.map(parse, [compact_vocab] * 8))
    assert all(t == tables[0] for t in tables)
    assert len({id(t) for t in tables}) == 8


# Registry
# ---------------------------------------------------------------------------


def test_list_profiles():
    """All five profiles are registered."""
    assert bv.list_profiles() == [
        "gpt2",
        "r50k_base",
        "p50k_base",
        "p50k_edit",
        "cl100k_base",
    ]


def test_get_profile_normalizes_name():
    """Lookup ignores case and accepts dashes."""
    assert bv.get_profile("P50K-EDIT") is P50K_EDIT


def test_get_unknown_profile_raises():
    """Unknown names raise UnknownProfileError listing what is available."""
    with pytest.raises(UnknownProfileError) as exc_info:
        bv.get_profile("o200k_base")
    assert exc_info.value.invalid_name == "o200k_base"
    assert "cl100k_base" in exc_info.value.available


def test_load_encoding_by_name(recording_engine, legacy_vocab):
    """load_encoding dispatches to the named profile."""
    built = bv.load_encoding("gpt2", legacy_vocab, engine=recording_engine)
    assert len(built.mergeable_ranks) == 258


def test_load_encoding_file(tmp_path, recording_engine, compact_vocab):
    """load_encoding_file reads a local file verbatim."""
    path = tmp_path / "p50k_base.tiktoken"
    path.write_bytes(compact_vocab.encode("utf-8"))
    built = bv.load_encoding_file("p50k_base", path, engine=recording_engine)
    assert len(built.mergeable_ranks) == 258


def test_load_encoding_file_keeps_carriage_returns(tmp_path, recording_engine):
    """CRLF files are not normalized before parsing."""
    path = tmp_path / "vocab.bpe"
    path.write_bytes(b"#version: 0.2\r\na b\r\n")
    with pytest.raises(UndecodableCodePointError):
        bv.load_encoding_file("gpt2", path, engine=recording_engine)


def test_vocab_urls_point_at_published_files():
    """Profiles record where their vocab file is published."""
    assert bv.get_profile("gpt2").vocab_url.endswith("/gpt-2/encodings/main/vocab.bpe")
    assert P50K_EDIT.vocab_url == bv.get_profile("p50k_base").vocab_url
