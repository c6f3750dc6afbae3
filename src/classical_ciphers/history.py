import json
from pathlib import Path
from typing import Optional

HISTORY_PATH = Path.home() / ".classical_ciphers_history.jsonl"


def log_event(
    action: str,
    cipher: str,
    key: int,
    length: Optional[int] = None,
    path: Optional[Path] = None,
) -> None:
    """
    Append one JSON line describing a cipher operation.

    `key` is the 8-bit key summary (shift amount or block size) and `length`
    the size of the processed text in bytes. Text and key material are never
    written.
    """
    record = {"action": action, "cipher": cipher, "key": key}
    if length is not None:
        record["length"] = length
    target = path or HISTORY_PATH
    try:
        with target.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError:
        # History failures should not break a transform.
        pass
