"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import utctimestamp...' works,
and gives every test fresh settings built from a clean environment.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from utctimestamp.config.settings import reset_settings

SETTINGS_ENV_VARS = (
    "UTCTIMESTAMP_OVERFLOW_POLICY",
    "UTCTIMESTAMP_STRICT_RANGE_DIRECTION",
    "UTCTIMESTAMP_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Clear utctimestamp environment variables and the settings cache."""
    for name in SETTINGS_ENV_VARS:
        # setenv first so teardown also removes values written by load_dotenv
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    reset_settings()
    yield
    reset_settings()
