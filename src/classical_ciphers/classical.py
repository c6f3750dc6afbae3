from typing import Dict, Iterator, Sequence

from .errors import MalformedKey

ALPHABET_SIZE = 26

_UPPER = (ord("A"), ord("Z"))
_LOWER = (ord("a"), ord("z"))


def _letter_base(byte: int) -> int:
    """Return the start of the 26-letter range `byte` belongs to, or -1."""
    if _UPPER[0] <= byte <= _UPPER[1]:
        return _UPPER[0]
    if _LOWER[0] <= byte <= _LOWER[1]:
        return _LOWER[0]
    return -1


def _rotate(data: bytes, shift: int) -> bytes:
    out = bytearray(data)
    for idx, byte in enumerate(out):
        base = _letter_base(byte)
        if base < 0:
            continue
        out[idx] = base + (byte - base + shift) % ALPHABET_SIZE
    return bytes(out)


def shift_encrypt(data: bytes, key: int) -> bytes:
    """
    Rotate A-Z/a-z bytes forward by `key` positions (wraps within each case).
    Every other byte is copied unchanged.
    """
    return _rotate(data, key % ALPHABET_SIZE)


def shift_decrypt(data: bytes, key: int) -> bytes:
    """Inverse of `shift_encrypt` for the same key."""
    return _rotate(data, -(key % ALPHABET_SIZE))


def iter_blocks(length: int, block_size: int) -> Iterator[int]:
    """
    Yield the start offset of every block the transposition touches.

    A block is processed only while `start + block_size < length`, so the last
    aligned block (the one ending exactly at `length`) and any shorter tail are
    left as they are.
    """
    if block_size <= 0:
        return
    start = 0
    while start + block_size < length:
        yield start
        start += block_size


def check_key_bounds(key: Sequence[int]) -> None:
    """
    Raise MalformedKey unless every entry is an int index into a block of len(key).

    Duplicates pass, so a trusted non-permutation key still stays inside its block.
    """
    size = len(key)
    for value in key:
        if isinstance(value, bool) or not isinstance(value, int):
            raise MalformedKey(f"Transposition key entries must be integers, got {value!r}.")
        if not 0 <= value < size:
            raise MalformedKey(f"Transposition key entry {value} is outside 0..{size - 1}.")


def _encrypt_block(buf: bytearray, start: int, key: Sequence[int]) -> None:
    # Displaced values, keyed by their original position in the block.
    saved: Dict[int, int] = {}
    for i, target in enumerate(key):
        saved[i] = buf[start + i]
        if target in saved:
            buf[start + i] = saved.pop(target)
        else:
            buf[start + i] = buf[start + target]


def _decrypt_block(buf: bytearray, start: int, key: Sequence[int]) -> None:
    saved: Dict[int, int] = {}
    for i, target in enumerate(key):
        saved[key[target]] = buf[start + target]
        if target in saved:
            buf[start + target] = saved.pop(target)
        else:
            buf[start + target] = buf[start + i]


def transposition_encrypt(data: bytes, key: Sequence[int]) -> bytes:
    """
    Permute bytes inside each processed block so that `out[i] = block[key[i]]`.

    See `iter_blocks` for which blocks are processed.
    """
    check_key_bounds(key)
    buf = bytearray(data)
    for start in iter_blocks(len(buf), len(key)):
        _encrypt_block(buf, start, key)
    return bytes(buf)


def transposition_decrypt(data: bytes, key: Sequence[int]) -> bytes:
    """Undo `transposition_encrypt` for the same permutation key."""
    check_key_bounds(key)
    buf = bytearray(data)
    for start in iter_blocks(len(buf), len(key)):
        _decrypt_block(buf, start, key)
    return bytes(buf)
