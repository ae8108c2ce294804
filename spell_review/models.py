"""
Spelling Review Models v1.0.0
=============================
Data classes shared by the tokenizer, the corrector and correction sessions.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Dict, Any


@dataclass(frozen=True)
class Token:
    """
    A word candidate found by the tokenizer.

    Attributes:
        word: The word exactly as it appears in the source text
        start: Start offset in the original text (inclusive)
        end: End offset in the original text (exclusive)
    """
    word: str
    start: int
    end: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {'word': self.word, 'start': self.start, 'end': self.end}


@dataclass(frozen=True)
class SpellingError:
    """
    A flagged word plus its ranked correction candidates.

    Offsets index the text the error was created against. After a
    correction changes the text length, use shifted() to move the
    remaining errors instead of editing them in place.

    Attributes:
        word: The flagged word, case preserved
        start_index: Start offset (inclusive)
        end_index: End offset (exclusive)
        suggestions: Up to 5 corrections, most likely first
    """
    word: str
    start_index: int
    end_index: int
    suggestions: List[str] = field(default_factory=list)

    def shifted(self, delta: int) -> 'SpellingError':
        """Return a copy with both offsets moved by delta."""
        return replace(
            self,
            start_index=self.start_index + delta,
            end_index=self.end_index + delta,
            suggestions=list(self.suggestions),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'word': self.word,
            'startIndex': self.start_index,
            'endIndex': self.end_index,
            'suggestions': list(self.suggestions),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SpellingError':
        """Build from the dictionary produced by to_dict()."""
        return cls(
            word=str(data['word']),
            start_index=int(data['startIndex']),
            end_index=int(data['endIndex']),
            suggestions=[str(s) for s in data.get('suggestions', [])],
        )


class SessionState(Enum):
    """Lifecycle of a correction session."""
    IDLE = "idle"
    CHECKING = "checking"
    CLEAN = "clean"
    REVIEWING = "reviewing"
    REVIEWING_EMPTY = "reviewing_empty"
    APPLIED = "applied"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.APPLIED, SessionState.CANCELLED, SessionState.FAILED)
