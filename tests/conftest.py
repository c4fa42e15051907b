"""Configuration file for pytest containing fixtures shared by all tests.

- isolated_environment: runs every test outside the repository with no
  ``BLUEPRINT_*`` variables set and a fresh validator selection
"""

import pytest

from blueprint.options import reset_validator

BLUEPRINT_ENV_VARS = (
    "BLUEPRINT_VALIDATOR",
    "BLUEPRINT_CONFIG_PATH",
    "BLUEPRINT_LOG_LEVEL",
    "BLUEPRINT_LOG_FORMAT",
    "BLUEPRINT_LOG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep config files and environment variables from leaking into tests."""
    for name in BLUEPRINT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_validator()
    yield
    reset_validator()
