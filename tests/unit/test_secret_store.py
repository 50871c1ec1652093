"""
Tests for the file-backed secret store.
"""

import json
import stat

import pytest

from shipit.core.exceptions import SecretStoreError
from shipit.services.secrets.store import FileSecretStore


@pytest.fixture
def store(tmp_path):
    return FileSecretStore(tmp_path / "nested" / "secrets.json")


def test_get_missing_file(store):
    assert store.get("vercelToken") is None


def test_store_and_get(store):
    store.store("vercelToken", "tok_123")

    assert store.get("vercelToken") == "tok_123"
    assert json.loads(store.path.read_text()) == {"vercelToken": "tok_123"}


def test_file_is_owner_only(store):
    store.store("vercelToken", "tok_123")

    mode = stat.S_IMODE(store.path.stat().st_mode)
    assert mode == 0o600


def test_store_replaces_value(store):
    store.store("vercelToken", "old")
    store.store("vercelToken", "new")

    assert store.get("vercelToken") == "new"


def test_keys_are_independent(store):
    store.store("a", "1111")
    store.store("b", "2222")
    store.delete("a")

    assert store.get("a") is None
    assert store.get("b") == "2222"


def test_delete(store):
    store.store("vercelToken", "tok")

    assert store.delete("vercelToken") is True
    assert store.get("vercelToken") is None
    assert store.delete("vercelToken") is False


def test_empty_value_reads_as_unset(store):
    store.store("vercelToken", "")

    assert store.get("vercelToken") is None


def test_corrupt_file_raises(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{broken")

    with pytest.raises(SecretStoreError) as exc_info:
        store.get("vercelToken")

    assert str(store.path) in str(exc_info.value)


def test_non_object_file_raises(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("[]")

    with pytest.raises(SecretStoreError):
        store.get("vercelToken")


def test_default_location(isolate_environment):
    store = FileSecretStore()

    assert store.path == isolate_environment / ".shipit" / "secrets.json"


def test_from_settings(settings, tmp_path):
    custom = tmp_path / "custom.json"
    settings.secrets.path = str(custom)

    assert FileSecretStore.from_settings(settings).path == custom
