import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

CONFIG_PATH = Path.home() / ".classical_ciphers.json"
DEFAULT_MAX_KEY_SIZE = 256

ENV_MAPPING: Dict[str, str] = {
    "max_key_size": "CLASSICAL_CIPHERS_MAX_KEY_SIZE",
    "validate_keys": "CLASSICAL_CIPHERS_VALIDATE_KEYS",
    "history": "CLASSICAL_CIPHERS_HISTORY",
    "history_path": "CLASSICAL_CIPHERS_HISTORY_PATH",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class CipherConfig:
    max_key_size: int = DEFAULT_MAX_KEY_SIZE
    validate_keys: bool = True
    history: bool = False
    history_path: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "max_key_size": self.max_key_size,
            "validate_keys": self.validate_keys,
            "history": self.history,
            "history_path": self.history_path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "CipherConfig":
        cfg = cls()
        max_key_size = data.get("max_key_size")
        if isinstance(max_key_size, int) and not isinstance(max_key_size, bool):
            cfg.max_key_size = max_key_size
        for name in ("validate_keys", "history"):
            value = data.get(name)
            if isinstance(value, bool):
                setattr(cfg, name, value)
        history_path = data.get("history_path")
        if isinstance(history_path, str):
            cfg.history_path = history_path
        return cfg

    def resolved_history_path(self) -> Optional[Path]:
        """Return the configured history file, or None for the default location."""
        if not self.history_path:
            return None
        return Path(self.history_path).expanduser()


def _parse_bool(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def _merge_env(cfg: CipherConfig) -> CipherConfig:
    raw = os.getenv(ENV_MAPPING["max_key_size"], "")
    if raw:
        try:
            cfg.max_key_size = int(raw)
        except ValueError:
            pass
    for name in ("validate_keys", "history"):
        parsed = _parse_bool(os.getenv(ENV_MAPPING[name], ""))
        if parsed is not None:
            setattr(cfg, name, parsed)
    history_path = os.getenv(ENV_MAPPING["history_path"], "")
    if history_path:
        cfg.history_path = history_path
    return cfg


def load_config(path: Path = CONFIG_PATH) -> CipherConfig:
    config = CipherConfig()
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                config = CipherConfig.from_dict(data)
        except (OSError, ValueError):
            # Fall back to defaults/env if file malformed.
            pass
    return _merge_env(config)


def save_config(config: CipherConfig, path: Path = CONFIG_PATH) -> None:
    payload = config.to_dict()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
