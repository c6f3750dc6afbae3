"""
Cipher objects wrapping the shift and transposition primitives.

A cipher is built once from its key data and can then encrypt or decrypt any
number of texts. `str` input gives `str` output and bytes-like input gives
`bytes` output; strings are processed as their UTF-8 bytes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .classical import (
    check_key_bounds,
    shift_decrypt,
    shift_encrypt,
    transposition_decrypt,
    transposition_encrypt,
)
from .config import CipherConfig, load_config
from .errors import MalformedKey
from .history import log_event
from .keygen import RandomSource, generate_transposition_key

Text = Union[str, bytes, bytearray, memoryview]

# surrogateescape keeps bytes that are no longer valid UTF-8 after a
# transposition, so decrypting the resulting str restores the original exactly.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def _to_bytes(text: Text) -> Tuple[bytes, bool]:
    if isinstance(text, str):
        return text.encode(_ENCODING, _ERRORS), True
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytes(text), False
    raise TypeError(f"Expected str or bytes-like text, got {type(text).__name__}.")


def _from_bytes(data: bytes, as_str: bool) -> Union[str, bytes]:
    return data.decode(_ENCODING, _ERRORS) if as_str else data


class Cipher(ABC):
    """Common encrypt/decrypt contract shared by every cipher variant."""

    name: str = "cipher"

    @abstractmethod
    def key(self) -> int:
        """Return the 8-bit key summary (shift amount or block size)."""

    @abstractmethod
    def _encrypt_bytes(self, data: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def _decrypt_bytes(self, data: bytes) -> bytes:
        raise NotImplementedError

    def _config(self) -> CipherConfig:
        return getattr(self, "config")

    def _resolve_config(self) -> None:
        # Settings are fixed at construction; transforms never read the file or environment.
        if getattr(self, "config", None) is None:
            object.__setattr__(self, "config", load_config())

    def _record(self, action: str, length: int) -> None:
        cfg = self._config()
        if not cfg.history:
            return
        log_event(action, self.name, self.key(), length=length, path=cfg.resolved_history_path())

    def encrypt(self, text: Text) -> Union[str, bytes]:
        data, as_str = _to_bytes(text)
        result = self._encrypt_bytes(data)
        self._record("encrypt", len(data))
        return _from_bytes(result, as_str)

    def decrypt(self, text: Text) -> Union[str, bytes]:
        data, as_str = _to_bytes(text)
        result = self._decrypt_bytes(data)
        self._record("decrypt", len(data))
        return _from_bytes(result, as_str)


@dataclass(frozen=True)
class ShiftCipher(Cipher):
    """
    Caesar-style rotation of ASCII letters.

    `shift` is an 8-bit value (0..255) and is reduced modulo 26 when used, so
    ShiftCipher(41) behaves exactly like ShiftCipher(15).
    """

    shift: int
    config: Optional[CipherConfig] = field(default=None, compare=False, repr=False)

    name = "shift"

    def __post_init__(self) -> None:
        self._resolve_config()
        if isinstance(self.shift, bool) or not isinstance(self.shift, int):
            raise MalformedKey(f"Shift key must be an integer, got {self.shift!r}.")
        if not 0 <= self.shift <= 0xFF:
            raise MalformedKey(f"Shift key must be in 0..255, got {self.shift}.")

    def key(self) -> int:
        return self.shift

    def _encrypt_bytes(self, data: bytes) -> bytes:
        return shift_encrypt(data, self.shift)

    def _decrypt_bytes(self, data: bytes) -> bytes:
        return shift_decrypt(data, self.shift)


def _check_permutation(key: Tuple[int, ...]) -> None:
    if sorted(key) != list(range(len(key))):
        raise MalformedKey(
            f"Transposition key must be a permutation of 0..{len(key) - 1}, got {list(key)}."
        )


@dataclass(frozen=True)
class TranspositionCipher(Cipher):
    """
    Block transposition: bytes are reordered inside blocks of len(permutation).

    Blocks are processed only while `start + len(permutation) < len(text)`, so a
    text whose length is an exact multiple of the block size keeps its final
    block untouched, and a text of exactly one block is returned unchanged.
    """

    permutation: Tuple[int, ...]
    config: Optional[CipherConfig] = field(default=None, compare=False, repr=False)

    name = "transposition"

    def __post_init__(self) -> None:
        key = tuple(self.permutation)
        object.__setattr__(self, "permutation", key)
        self._resolve_config()
        check_key_bounds(key)
        if self._config().validate_keys:
            _check_permutation(key)

    @classmethod
    def generate(
        cls,
        key_size: int,
        rng: Optional[RandomSource] = None,
        config: Optional[CipherConfig] = None,
    ) -> "TranspositionCipher":
        """Build a cipher around a freshly generated permutation key."""
        cfg = config or load_config()
        return cls(generate_transposition_key(key_size, rng=rng, config=cfg), config=cfg)

    def key(self) -> int:
        return len(self.permutation) & 0xFF

    def _encrypt_bytes(self, data: bytes) -> bytes:
        return transposition_encrypt(data, self.permutation)

    def _decrypt_bytes(self, data: bytes) -> bytes:
        return transposition_decrypt(data, self.permutation)
