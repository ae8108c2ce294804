"""
Spelling Engine Configuration
=============================
Tunables for the tokenizer, the suggestion heuristics and the
correction-session registry.

Configuration can be set via:
1. Environment variables (SPELL_MAX_SUGGESTIONS=3)
2. Config file (spelling_config.json)
3. Direct API calls (config.set('max_suggestions', 3))

Defaults give five suggestions per word and mask code and URLs.
"""

import os
import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

from config_logging import get_logger

logger = get_logger('spell_review.config')

__version__ = "1.0.0"

# Default configuration path
CONFIG_FILE = Path(__file__).parent.parent / "spelling_config.json"


@dataclass
class SpellingConfig:
    """Spelling engine configuration."""
    # Suggestion generation
    max_suggestions: int = 5
    max_missing_letter_candidates: int = 10
    missing_letters: str = "eaioulrnst"
    min_doubled_result_length: int = 3
    min_removal_result_length: int = 2

    # Tokenizer masking passes
    mask_code_blocks: bool = True
    mask_inline_code: bool = True
    mask_urls: bool = True

    # Extra correctly-spelled words, one per line
    custom_words_file: Optional[str] = None

    # Correction sessions
    session_ttl: float = 3600
    max_sessions: int = 100


# Global configuration instance
_config: Optional[SpellingConfig] = None


def get_config() -> SpellingConfig:
    """Get the global spelling configuration."""
    global _config
    if _config is None:
        _config = _load_config()
    return _config


def _load_config() -> SpellingConfig:
    """Load configuration from file and environment."""
    config = SpellingConfig()

    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE, 'r', encoding='utf-8') as f:
                _apply_dict_to_config(config, json.load(f))
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Could not load config file {CONFIG_FILE}: {e}")

    _apply_env_to_config(config)
    return config


def _apply_dict_to_config(config: SpellingConfig, data: Dict[str, Any]):
    """Apply dictionary values to config object."""
    for key, value in data.items():
        if hasattr(config, key):
            setattr(config, key, value)


def _apply_env_to_config(config: SpellingConfig):
    """Apply environment variables to config."""
    env_mappings = {
        'SPELL_MAX_SUGGESTIONS': ('max_suggestions', int),
        'SPELL_MAX_MISSING_LETTER_CANDIDATES': ('max_missing_letter_candidates', int),
        'SPELL_MISSING_LETTERS': ('missing_letters', str),
        'SPELL_MASK_CODE_BLOCKS': ('mask_code_blocks', _parse_bool),
        'SPELL_MASK_INLINE_CODE': ('mask_inline_code', _parse_bool),
        'SPELL_MASK_URLS': ('mask_urls', _parse_bool),
        'SPELL_CUSTOM_WORDS_FILE': ('custom_words_file', str),
        'SPELL_SESSION_TTL': ('session_ttl', float),
        'SPELL_MAX_SESSIONS': ('max_sessions', int),
    }

    for env_var, (key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                setattr(config, key, converter(value))
            except ValueError as e:
                logger.warning(f"Invalid env var {env_var}={value}: {e}")


def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ('true', '1', 'yes', 'on')


def get(key: str, default: Any = None) -> Any:
    """Get a configuration value by name."""
    return getattr(get_config(), key, default)


def set(key: str, value: Any):
    """
    Set a configuration value by name.

    Example: set('max_suggestions', 3)
    """
    config = get_config()
    if key not in {f.name for f in fields(config)}:
        raise ValueError(f"Unknown config key: {key}")
    setattr(config, key, value)


def save_config(path: Optional[Path] = None):
    """Save current configuration to file."""
    path = path or CONFIG_FILE
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(get_config()), f, indent=2)


def reset_config():
    """Reset configuration to defaults."""
    global _config
    _config = SpellingConfig()
