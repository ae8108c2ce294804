"""
Heuristic Suggestion Generator
==============================
Produces correction candidates for words that are not known misspellings.

Four independent strategies each transform the lowercased word:

- doubled-letter collapse   ("untill" -> "until")
- common digraph swap       ("recieve" -> "receive")
- missing-letter insertion  ("xample" -> "example")
- extra-letter removal      ("whate" -> "what")

Candidates are NOT checked against a word list, so non-words can be
proposed. The union keeps first-seen order and is capped.
"""

from typing import List, Optional

from . import config as spelling_config
from .dictionary import COMMON_MISSPELLINGS, capitalize, starts_uppercase

COMMON_SWAPS = (
    ('ie', 'ei'), ('ei', 'ie'),
    ('er', 're'), ('re', 'er'),
    ('al', 'le'), ('le', 'al'),
)


def fix_doubled_letters(word: str, min_length: int = 3) -> List[str]:
    """Drop one letter of every adjacent identical pair."""
    fixes = []
    for i in range(len(word) - 1):
        if word[i] == word[i + 1]:
            fixed = word[:i] + word[i + 1:]
            # Known misspellings never reach this path, so length decides
            if word in COMMON_MISSPELLINGS or len(fixed) >= min_length:
                fixes.append(fixed)
    return fixes


def fix_common_swaps(word: str) -> List[str]:
    """Swap the first occurrence of each commonly transposed pair."""
    return [word.replace(src, dst, 1) for src, dst in COMMON_SWAPS if src in word]


def fix_missing_letters(word: str, letters: str = "eaioulrnst", limit: int = 10) -> List[str]:
    """Insert common letters at every position, keeping the first `limit`."""
    fixes = []
    for i in range(len(word) + 1):
        for letter in letters:
            fixed = word[:i] + letter + word[i:]
            if len(fixed) <= len(word) + 2:
                fixes.append(fixed)
    return fixes[:limit]


def fix_extra_letters(word: str, min_length: int = 2) -> List[str]:
    """Remove each single character in turn."""
    fixes = []
    for i in range(len(word)):
        fixed = word[:i] + word[i + 1:]
        if len(fixed) >= min_length:
            fixes.append(fixed)
    return fixes


def generate_advanced_suggestions(
    word: str,
    config: Optional[spelling_config.SpellingConfig] = None
) -> List[str]:
    """
    Generate correction candidates for a word using all four strategies.

    Args:
        word: The word as it appears in the text (case preserved)
        config: Limits and letter set (defaults to the global configuration)

    Returns:
        Up to config.max_suggestions unique candidates. Candidates are
        capitalized when the original word starts with an uppercase letter.
    """
    config = config or spelling_config.get_config()
    lower_word = word.lower()

    candidates = (
        fix_doubled_letters(lower_word, config.min_doubled_result_length)
        + fix_common_swaps(lower_word)
        + fix_missing_letters(lower_word, config.missing_letters,
                              config.max_missing_letter_candidates)
        + fix_extra_letters(lower_word, config.min_removal_result_length)
    )

    # dict keeps insertion order, giving an ordered set
    result = list(dict.fromkeys(candidates))[:config.max_suggestions]

    if starts_uppercase(word):
        return [capitalize(s) for s in result]
    return result
