import pytest

from booklend.config import Settings
from booklend.library import LibraryService


@pytest.fixture
def settings(tmp_path, monkeypatch):
    # Every test gets its own data directory
    data_dir = tmp_path / "Data"
    monkeypatch.setenv("BOOKLEND_DATA_DIR", str(data_dir))
    monkeypatch.setenv("LIB_CLI_OUTPUT", "plain")
    return Settings()


@pytest.fixture
def lib(settings):
    return LibraryService.from_settings(settings)
