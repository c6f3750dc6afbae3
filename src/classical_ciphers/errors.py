class CipherError(ValueError):
    """Base class for errors raised by classical_ciphers."""


class InvalidKeySize(CipherError):
    """Raised when a transposition key of the requested size cannot be generated."""


class MalformedKey(CipherError):
    """Raised when a cipher is constructed with an unusable key."""
