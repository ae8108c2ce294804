"""
Markdown-aware word tokenizer.

Spans that must never be spell checked (fenced code blocks, inline code,
bare URLs) are blanked with spaces of the same length before scanning, so
every offset found in the masked text is also valid in the original.
"""

import re
from typing import List, Optional

from .models import Token
from . import config as spelling_config

# An unterminated fence runs to the end of the text
CODE_BLOCK_PATTERN = re.compile(r'```[\s\S]*?(?:```|\Z)')
INLINE_CODE_PATTERN = re.compile(r'`[^`]+`')
URL_PATTERN = re.compile(r'https?://[^\s]+')

# Letters, optionally one contraction part and/or one hyphenated part
WORD_PATTERN = re.compile(r"\b[a-zA-Z]+(?:['’][a-zA-Z]+)?(?:-[a-zA-Z]+)?\b")


def _blank(match: 're.Match') -> str:
    return ' ' * len(match.group(0))


def mask_text(text: str, config: Optional[spelling_config.SpellingConfig] = None) -> str:
    """Blank every non-checkable span; the result has the same length as text."""
    config = config or spelling_config.get_config()
    masked = text
    if config.mask_code_blocks:
        masked = CODE_BLOCK_PATTERN.sub(_blank, masked)
    if config.mask_inline_code:
        masked = INLINE_CODE_PATTERN.sub(_blank, masked)
    if config.mask_urls:
        masked = URL_PATTERN.sub(_blank, masked)
    return masked


def extract_words(text: str, config: Optional[spelling_config.SpellingConfig] = None) -> List[Token]:
    """
    Extract candidate words with their positions in the original text.

    Args:
        text: Raw markdown-like text
        config: Masking options (defaults to the global configuration)

    Returns:
        Tokens in left-to-right order. A fresh scan is performed on every call.
    """
    if not text:
        return []

    masked = mask_text(text, config)
    return [
        Token(word=text[m.start():m.end()], start=m.start(), end=m.end())
        for m in WORD_PATTERN.finditer(masked)
    ]
