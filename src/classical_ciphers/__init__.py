from .cipher import Cipher, ShiftCipher, TranspositionCipher
from .classical import (
    check_key_bounds,
    iter_blocks,
    shift_decrypt,
    shift_encrypt,
    transposition_decrypt,
    transposition_encrypt,
)
from .config import CONFIG_PATH, CipherConfig, load_config, save_config
from .errors import CipherError, InvalidKeySize, MalformedKey
from .history import HISTORY_PATH, log_event
from .keygen import generate_transposition_key

__all__ = [
    "Cipher",
    "ShiftCipher",
    "TranspositionCipher",
    "check_key_bounds",
    "iter_blocks",
    "shift_encrypt",
    "shift_decrypt",
    "transposition_encrypt",
    "transposition_decrypt",
    "generate_transposition_key",
    "CipherConfig",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "CipherError",
    "InvalidKeySize",
    "MalformedKey",
    "HISTORY_PATH",
    "log_event",
]
