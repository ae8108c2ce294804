"""Shared fixtures for the spell_review test suite."""

import pytest

from spell_review import config as spelling_config
from spell_review import session as session_module


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test starts from default engine configuration and no sessions."""
    spelling_config.reset_config()
    session_module.reset_session_manager()
    yield spelling_config.get_config()
    spelling_config.reset_config()
    session_module.reset_session_manager()


@pytest.fixture
def sample_text() -> str:
    """Markdown with misspellings inside and outside code."""
    return (
        "Teh freind said hello.\n"
        "```\nteh code block\n```\n"
        "Use `wierd` here and see https://example.com/recieve now.\n"
        "It was wierd."
    )
