"""Configuration loader for rimelex.

Loads defaults and dictionary definitions from config.json at project root,
with hardcoded fallbacks.
"""

import json
from pathlib import Path
from typing import Any, Optional

from .builder.tables import DictionarySpec
from .schema import MARKER

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "rime_dir": ".",
    "marker": MARKER,
    "comment_char": "#",
    "policy": "review",
    "strict": False,
    "acronym_path": "others/en_acronym.txt",
}

# Dictionaries without filter/cutoff are compared by text only
FALLBACK_DICTIONARIES = {
    "hanzi": {"path": "cn_dicts/8105.dict.yaml"},
    "base": {"path": "cn_dicts/base.dict.yaml"},
    "ext": {"path": "cn_dicts/ext.dict.yaml"},
    "tencent": {"path": "cn_dicts/tencent.dict.yaml"},
    "en": {
        "path": "en_dicts/en.dict.yaml",
        "filter": "all_lower",
        "cutoff": "remove_both",
    },
    "en_ext": {
        "path": "en_dicts/en_ext.dict.yaml",
        "filter": "none",
        "cutoff": "remove_both",
    },
    "ahd": {
        "path": "en_dicts/AHD5_mix_split.yaml",
        "filter": "capital_split",
        "cutoff": "remove_both",
    },
}

_config: dict[str, Any] | None = None


def _find_config() -> Path | None:
    """Find config.json by walking up from current file."""
    paths = [
        Path(__file__).parent.parent.parent / "config.json",  # python/rimelex -> root
        Path(__file__).parent.parent / "config.json",
        Path.cwd() / "config.json",
        Path.cwd().parent / "config.json",
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def load(path: Optional[Path | str] = None) -> dict[str, Any]:
    """Load configuration from config.json or use fallbacks.

    Args:
        path: Explicit config file; searched for when omitted.
    """
    global _config
    if _config is not None and path is None:
        return _config

    config_path = Path(path) if path else _find_config()
    if config_path:
        try:
            with open(config_path, encoding="utf-8") as f:
                _config = json.load(f)
                return _config
        except (json.JSONDecodeError, OSError):
            pass

    # Fallback
    _config = {
        "defaults": FALLBACK_DEFAULTS,
        "dictionaries": FALLBACK_DICTIONARIES,
    }
    return _config


def reset() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default value from config."""
    cfg = load()
    return cfg.get("defaults", {}).get(key, fallback)


def get_dictionaries() -> list[DictionarySpec]:
    """Get the configured dictionaries as specs."""
    cfg = load()
    dictionaries = cfg.get("dictionaries", FALLBACK_DICTIONARIES)
    return [
        DictionarySpec.from_dict(name, data)
        for name, data in dictionaries.items()
    ]


# Convenience accessors
def default_rime_dir() -> str:
    return get_default("rime_dir", FALLBACK_DEFAULTS["rime_dir"])


def default_marker() -> str:
    return get_default("marker", FALLBACK_DEFAULTS["marker"])


def default_comment_char() -> str:
    return get_default("comment_char", FALLBACK_DEFAULTS["comment_char"])


def default_policy() -> str:
    return get_default("policy", FALLBACK_DEFAULTS["policy"])


def default_strict() -> bool:
    return get_default("strict", FALLBACK_DEFAULTS["strict"])


def default_acronym_path() -> str:
    return get_default("acronym_path", FALLBACK_DEFAULTS["acronym_path"])
