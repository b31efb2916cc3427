"""Shared pytest configuration and fixtures for prompt converter tests."""

import os

import pytest

from prompt_converters.conversion.names import PromptNames, get_prompt_names
from prompt_converters.core.config.schema import ConfigSchema


@pytest.fixture
def names() -> PromptNames:
    """Speaker names used across converter tests."""
    return get_prompt_names("Alice", "Bob", ["Alice", "Carol"])


@pytest.fixture
def no_names() -> PromptNames:
    return get_prompt_names()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests (fast, no external deps)")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (full conversion flow)"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers to tests based on their location."""
    for item in items:
        if "tests/unit/" in str(item.fspath) or "tests/cli/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(scope="function", autouse=True)
def setup_test_environment():
    """Clear configuration environment variables around each test.

    Values from a developer's shell or .env file must not leak into tests.
    The config singleton is rebuilt before and after the test so it only
    reflects the defaults plus whatever the test sets.
    """
    from prompt_converters.core.config import Config

    spec_names = [spec.name for spec in ConfigSchema.all_specs().values()]
    original_env = {name: os.environ.get(name) for name in spec_names}

    try:
        for name in spec_names:
            os.environ.pop(name, None)
        Config.reset_singleton()

        yield

    finally:
        for name, value in original_env.items():
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value
        Config.reset_singleton()
