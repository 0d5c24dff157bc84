"""Shared fixtures."""
import pytest

from constants import Constants


@pytest.fixture(autouse=True)
def restore_constants():
    """Undo any Constants overrides applied by the code under test."""
    saved = {k: v for k, v in vars(Constants).items() if k.isupper()}
    yield
    for key, value in saved.items():
        setattr(Constants, key, value)
