import pytest

from config import JsonBlobStore


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("SETTLE_LEDGER_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def store(tmp_path):
    return JsonBlobStore(str(tmp_path / "storage.json"))
