"""Shared fixtures for bpevocab tests."""

import base64
from types import SimpleNamespace

import pytest


@pytest.fixture
def recording_engine():
    """Return an engine that records the arguments it was built with."""
    calls: list[SimpleNamespace] = []

    def engine(mergeable_ranks, special_tokens, pat_str):
        built = SimpleNamespace(
            mergeable_ranks=mergeable_ranks,
            special_tokens=special_tokens,
            pat_str=pat_str,
        )
        calls.append(built)
        return built

    engine.calls = calls
    return engine


@pytest.fixture
def legacy_vocab():
    """Return a minimal data-gym vocab: header, two merges, trailing blank line."""
    return "#version: 0.2\na b\nab c\n"


@pytest.fixture
def compact_vocab():
    """Return a small tiktoken vocab covering all 256 bytes plus two merges."""
    lines = [f"{base64.b64encode(bytes([b])).decode()} {b}" for b in range(256)]
    lines.append(f"{base64.b64encode(b'ab').decode()} 256")
    lines.append(f"{base64.b64encode(b'abc').decode()} 257")
    return "\n".join(lines) + "\n"
