"""Registry and lookup functions for model profiles."""

import logging
from pathlib import Path
from typing import Any, Final, Literal

from .errors import UnknownProfileError
from .profiles import (
    CL100K_BASE,
    GPT2,
    P50K_BASE,
    P50K_EDIT,
    R50K_BASE,
    ModelProfile,
)
from .types import Engine

log = logging.getLogger(__name__)


# Profile registry
# ===================================================================================

ProfileName = Literal["gpt2", "r50k_base", "p50k_base", "p50k_edit", "cl100k_base"]

_PROFILE_REGISTRY: Final[dict[str, ModelProfile]] = {
    profile.name: profile
    for profile in (GPT2, R50K_BASE, P50K_BASE, P50K_EDIT, CL100K_BASE)
}


def list_profiles() -> list[str]:
    """Return names of all registered model profiles."""
    return list(_PROFILE_REGISTRY.keys())


def get_profile(name: ProfileName | str) -> ModelProfile:
    """
    Look up a model profile by name.

    Lookup is case-insensitive and accepts ``-`` in place of ``_``.

    :param name: Profile name, e.g. "cl100k_base" or "P50K-EDIT".
    :return: The registered profile.
    :raises UnknownProfileError: If no profile has that name.
    """
    key = name.lower().replace("-", "_")
    if key not in _PROFILE_REGISTRY:
        raise UnknownProfileError(
            "unknown profile name",
            invalid_name=name,
            available=list_profiles(),
        )
    return _PROFILE_REGISTRY[key]


# ===================================================================================


# Loading
# ===================================================================================


def load_encoding(
    name: ProfileName | str, model_file: str, engine: Engine | None = None
) -> Any:
    """
    Build the tokenizer of a named profile from vocabulary file text.

    :param name: Profile name.
    :param model_file: Already retrieved text of the vocabulary file.
    :param engine: Callable taking ``(mergeable_ranks, special_tokens, pattern)``.
                   Defaults to building a :class:`tiktoken.Encoding`.
    :return: Whatever ``engine`` returns.
    :raises UnknownProfileError: If the profile is not registered.
    :raises VocabParseError: If the vocabulary text is malformed.

    .. code-block:: python

        enc = load_encoding("cl100k_base", Path("cl100k_base.tiktoken").read_text())
        tokens = enc.encode("hello world")
    """
    return get_profile(name).build(model_file, engine)


def load_encoding_file(
    name: ProfileName | str, path: str | Path, engine: Engine | None = None
) -> Any:
    """
    Read a local vocabulary file as UTF-8 and build the named profile from it.

    :raises UnknownProfileError: If the profile is not registered.
    :raises VocabParseError: If the vocabulary text is malformed.
    :raises OSError: If the file cannot be read.
    """
    profile = get_profile(name)
    path = Path(path)
    log.info(f"reading {profile.name} vocabulary from {path}")
    # newline="" keeps CR characters so parsing sees the file verbatim
    with path.open("r", encoding="utf-8", newline="") as f:
        model_file = f.read()
    return profile.build(model_file, engine)


# ===================================================================================
