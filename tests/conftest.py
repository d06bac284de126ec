"""Shared fixtures for linguapo tests."""
import sys
from pathlib import Path

import pytest

# Ensure src is on path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES


@pytest.fixture
def tmp_out(tmp_path):
    """Temp directory for output files."""
    return tmp_path


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Point the settings service at a temp file."""
    settings_file = tmp_path / "settings.json"
    monkeypatch.setattr("linguapo.services.settings._SETTINGS_FILE", settings_file)
    from linguapo.services.settings import Settings
    Settings.reset_instance()
    yield settings_file
    Settings.reset_instance()
