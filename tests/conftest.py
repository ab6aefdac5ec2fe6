"""
Shared fixtures for the decoder tests.
"""

import base64
import os

import pytest

from gethash import config


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from GETHASH_* variables and the settings singleton."""
    for name in list(os.environ):
        if name.startswith("GETHASH_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr(config, "_settings", None)
    yield


@pytest.fixture
def payload_42():
    """Hand-packed payload whose digits are 42."""
    return base64.b64encode(b'%(BTC*"  ').decode("ascii")
