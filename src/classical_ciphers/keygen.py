from typing import List, Optional, Protocol, Set

from Crypto.Random import random as strong_random

from .config import CipherConfig, load_config
from .errors import InvalidKeySize
from .history import log_event


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int:  # pragma: no cover - interface only
        ...


def generate_transposition_key(
    key_size: int,
    rng: Optional[RandomSource] = None,
    config: Optional[CipherConfig] = None,
) -> List[int]:
    """
    Produce a random permutation of 0..key_size-1 for the transposition cipher.

    Values are drawn uniformly from [0, key_size-1] and kept the first time they
    appear, until every value has been seen. `rng` defaults to pycryptodome's
    OS-backed generator; pass a seeded `random.Random` for reproducible keys.
    """
    cfg = config or load_config()
    if isinstance(key_size, bool) or not isinstance(key_size, int):
        raise InvalidKeySize(f"Key size must be an integer, got {key_size!r}.")
    if key_size < 1:
        raise InvalidKeySize("Key size must be at least 1.")
    if key_size > cfg.max_key_size:
        raise InvalidKeySize(
            f"Key size {key_size} exceeds the configured maximum of {cfg.max_key_size}."
        )

    source = rng or strong_random
    key: List[int] = []
    seen: Set[int] = set()
    while len(key) != key_size:
        value = source.randint(0, key_size - 1)
        if value in seen:
            continue
        seen.add(value)
        key.append(value)

    if cfg.history:
        log_event("generate_key", "transposition", key_size, path=cfg.resolved_history_path())
    return key
