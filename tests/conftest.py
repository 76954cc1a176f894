"""Pytest configuration and fixtures for wren tests."""

import pytest

from wren import FormatContext, Formatter, FormatterConfig, format_string


@pytest.fixture
def config():
    """Default formatter configuration."""
    return FormatterConfig()


@pytest.fixture
def narrow_config():
    """Configuration with a 30-column width for wrapping tests."""
    return FormatterConfig(max_line_length=30)


@pytest.fixture
def formatter():
    """Formatter with the default configuration and no rewriters."""
    return Formatter()


@pytest.fixture
def context():
    """Default per-file format context."""
    return FormatContext()


@pytest.fixture
def fmt():
    """Format a template string, optionally with config overrides."""

    def _format(source: str, **overrides) -> str:
        config = FormatterConfig(**overrides) if overrides else None
        return format_string(source, config=config)

    return _format


def assert_idempotent(source: str, **overrides) -> str:
    """Assert that formatting the formatted output changes nothing.

    Returns:
        The formatted text.
    """
    config = FormatterConfig(**overrides) if overrides else None
    once = format_string(source, config=config)
    twice = format_string(once, config=config)
    assert once == twice, (
        f"Formatting is not idempotent:\n"
        f"  First:  {once!r}\n"
        f"  Second: {twice!r}"
    )
    return once
