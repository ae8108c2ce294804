"""
Spelling Corrector
==================
Turns tokens into SpellingErrors and applies corrections while keeping
the offsets of not-yet-processed errors valid.

The module-level functions are pure. SpellingCorrector wraps them with
per-instance configuration, extra known words and logging.
"""

import asyncio
from typing import Dict, FrozenSet, Iterable, List, Optional, Any

from config_logging import get_logger, handle_errors, PreconditionError, StaleCorrectionError
from . import config as spelling_config
from .dictionary import lookup, is_known_word, load_word_list
from .models import SpellingError
from .suggestions import generate_advanced_suggestions
from .tokenizer import extract_words

logger = get_logger('spell_review.corrector')


def check_spelling(
    text: str,
    config: Optional[spelling_config.SpellingConfig] = None,
    extra_words: Optional[FrozenSet[str]] = None
) -> List[SpellingError]:
    """
    Check text and return spelling errors in scan order.

    A known misspelling is reported with its dictionary alternatives.
    A word in the known-word vocabulary is accepted. Any other word
    is reported only if the heuristics produce at least one suggestion.
    """
    config = config or spelling_config.get_config()
    errors: List[SpellingError] = []

    for token in extract_words(text, config):
        suggestions = lookup(token.word)
        if suggestions is None:
            if is_known_word(token.word, extra_words):
                continue
            suggestions = generate_advanced_suggestions(token.word, config)
            if not suggestions:
                continue

        errors.append(SpellingError(
            word=token.word,
            start_index=token.start,
            end_index=token.end,
            suggestions=suggestions,
        ))

    return errors


async def check_spelling_async(
    text: str,
    config: Optional[spelling_config.SpellingConfig] = None,
    extra_words: Optional[FrozenSet[str]] = None
) -> List[SpellingError]:
    """Run check_spelling on a worker thread so an event loop stays responsive."""
    return await asyncio.to_thread(check_spelling, text, config, extra_words)


def replace_word(text: str, error: SpellingError, replacement: str) -> str:
    """
    Replace the word covered by error with replacement.

    Raises:
        StaleCorrectionError: the error's offsets do not cover error.word in
            text, i.e. the text changed outside apply_correction_and_shift().
    """
    start, end = error.start_index, error.end_index
    if not (0 <= start < end <= len(text)) or text[start:end] != error.word:
        raise StaleCorrectionError(
            f'Offsets {start}:{end} no longer cover "{error.word}"',
            word=error.word, start_index=start, end_index=end,
        )
    return text[:start] + replacement + text[end:]


def apply_correction_and_shift(
    errors: List[SpellingError],
    current_index: int,
    replacement: str
) -> List[SpellingError]:
    """
    Return the pending errors after correcting errors[current_index].

    Errors after current_index are shifted by the length change, earlier
    ones are kept as they are, and the corrected error is dropped. The
    input list is not modified.
    """
    if not 0 <= current_index < len(errors):
        raise PreconditionError(
            f"No spelling error at index {current_index}",
            index=current_index, count=len(errors),
        )

    delta = len(replacement) - len(errors[current_index].word)
    return [
        error if idx < current_index else error.shifted(delta)
        for idx, error in enumerate(errors)
        if idx != current_index
    ]


class SpellingCorrector:
    """
    Configured spelling checker.

    Adds custom vocabulary on top of the shared, read-only dictionary and
    logs timing for each check.
    """

    CHECKER_NAME = "Spelling"
    CHECKER_VERSION = "1.0.0"

    def __init__(
        self,
        config: Optional[spelling_config.SpellingConfig] = None,
        custom_words: Optional[Iterable[str]] = None
    ):
        self.config = config or spelling_config.get_config()
        words = {w.lower() for w in (custom_words or ())}
        if self.config.custom_words_file:
            words.update(load_word_list(self.config.custom_words_file))
        self._extra_words: FrozenSet[str] = frozenset(words)

    @property
    def custom_words(self) -> FrozenSet[str]:
        return self._extra_words

    def add_words(self, words: Iterable[str]):
        """Accept more words as correctly spelled for this corrector."""
        self._extra_words = self._extra_words | {w.lower() for w in words}

    @handle_errors(logger)
    def check(self, text: str) -> List[SpellingError]:
        """Check text and return spelling errors in scan order."""
        with logger.log_operation('spelling_check', chars=len(text)):
            errors = check_spelling(text, self.config, self._extra_words)
        logger.debug("Spelling check complete", error_count=len(errors))
        return errors

    async def check_async(self, text: str) -> List[SpellingError]:
        return await asyncio.to_thread(self.check, text)

    def replace(self, text: str, error: SpellingError, replacement: str) -> str:
        return replace_word(text, error, replacement)

    def get_status(self) -> Dict[str, Any]:
        """Describe the corrector for diagnostics."""
        return {
            'name': self.CHECKER_NAME,
            'version': self.CHECKER_VERSION,
            'custom_word_count': len(self._extra_words),
            'max_suggestions': self.config.max_suggestions,
        }
