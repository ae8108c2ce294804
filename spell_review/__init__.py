"""
Spelling Review Module v1.0.0
=============================
Markdown-aware spell checking with suggestions and offset-safe corrections.

Features:
- Skips fenced code blocks, inline code and URLs without shifting offsets
- Known-misspelling dictionary with case-aware suggestions
- Four heuristic suggestion strategies for everything else
- Sequential corrections that keep pending error offsets valid
- Interactive correction sessions and a Flask API

Author: SpellReview
"""

from .models import Token, SpellingError, SessionState
from .tokenizer import extract_words, mask_text
from .dictionary import COMMON_MISSPELLINGS, KNOWN_WORDS, lookup
from .suggestions import generate_advanced_suggestions
from .corrector import (
    SpellingCorrector,
    check_spelling,
    check_spelling_async,
    replace_word,
    apply_correction_and_shift
)
from .session import CorrectionSession, SessionManager, get_session_manager
from .routes import spelling_blueprint

__version__ = "1.0.0"
__all__ = [
    'Token',
    'SpellingError',
    'SessionState',
    'extract_words',
    'mask_text',
    'COMMON_MISSPELLINGS',
    'KNOWN_WORDS',
    'lookup',
    'generate_advanced_suggestions',
    'SpellingCorrector',
    'check_spelling',
    'check_spelling_async',
    'replace_word',
    'apply_correction_and_shift',
    'CorrectionSession',
    'SessionManager',
    'get_session_manager',
    'spelling_blueprint'
]
