import json
import logging
import os

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from config import (
    STORAGE_KEY,
    JsonBlobStore,
    Settings,
    get_default_store,
    load_settings,
    records_from_json,
    records_to_json,
)
from models import MalformedSnapshot, SplitRecord

from strategies import amounts, records_strategy


class TestSettings:

    def test_defaults_when_file_missing(self, home):
        s = load_settings()
        assert s.data_dir == str(home)
        assert s.currency == "Rupees"
        assert s.storage_key == STORAGE_KEY
        assert s.storage_path == os.path.join(str(home), "storage.json")

    def test_reads_known_keys_and_ignores_the_rest(self, home):
        (home / "settings.json").write_text(
            json.dumps({"currency": "EUR", "eps": "0.001", "theme": "dark"}), encoding="utf-8"
        )
        s = load_settings()
        assert s.currency == "EUR"
        assert s.eps == 0.001
        assert s.data_dir == str(home)

    def test_non_object_settings_fall_back(self, home):
        (home / "settings.json").write_text("[1, 2]", encoding="utf-8")
        assert load_settings().currency == "Rupees"

    @pytest.mark.parametrize("text", ["{currency: EUR", "[" * 200000])
    def test_corrupt_settings_fall_back(self, home, text, caplog):
        (home / "settings.json").write_text(text, encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            s = load_settings()
        assert s.currency == "Rupees"
        assert s.data_dir == str(home)
        assert "corrupt" in caplog.text

    def test_default_store_uses_settings(self, home):
        store = get_default_store(Settings(data_dir=str(home), storage_key="k"))
        assert store.path == os.path.join(str(home), "storage.json")
        assert store.key == "k"


class TestSnapshotJson:

    def test_wire_format(self):
        text = records_to_json([SplitRecord("Alice", "Bob", 30.0)])
        assert json.loads(text) == [{"from": "Alice", "to": "Bob", "amount": 30.0}]

    @pytest.mark.parametrize("text", ["", "not json", "{}", '"x"', '[{"from": "A"}]', '[1]', "[" * 100000])
    def test_malformed(self, text):
        with pytest.raises(MalformedSnapshot):
            records_from_json(text)


class TestJsonBlobStore:

    def test_load_without_file_is_empty(self, store):
        assert store.load() == []

    def test_save_then_load(self, store):
        records = [SplitRecord("Alice", "Bob", 30.0), SplitRecord("Alice", "Carol", 100 / 3)]
        store.save(records)
        assert store.load() == records

    def test_save_overwrites(self, store):
        store.save([SplitRecord("Alice", "Bob", 30.0)])
        store.save([])
        assert store.load() == []

    def test_other_keys_are_kept(self, store):
        store.put("other", "value")
        store.save([SplitRecord("Alice", "Bob", 1.0)])
        assert store.get("other") == "value"

    def test_blob_is_a_json_string_under_the_key(self, store):
        store.save([SplitRecord("Alice", "Bob", 1.0)])
        with open(store.path, encoding="utf-8") as f:
            raw = json.load(f)
        assert json.loads(raw[STORAGE_KEY]) == [{"from": "Alice", "to": "Bob", "amount": 1.0}]

    @pytest.mark.parametrize("blob", [
        "{broken",
        '{"from": "A"}',
        '[{"from": "A", "to": "B", "amount": -1}]',
        '[{"from": "A", "to": "B", "amount": 1' + "0" * 400 + '}]',
        '[{"from": "A", "to": "A", "amount": 1}]',
        "[" * 200000,
    ])
    def test_malformed_blob_is_treated_as_absent(self, store, blob, caplog):
        store.put(STORAGE_KEY, blob)
        with caplog.at_level(logging.WARNING):
            assert store.load() == []
        assert "malformed" in caplog.text

    def test_corrupt_file_is_treated_as_absent(self, store):
        with open(store.path, "w", encoding="utf-8") as f:
            f.write("}{")
        assert store.load() == []

    def test_deeply_nested_file_is_treated_as_absent(self, store):
        with open(store.path, "w", encoding="utf-8") as f:
            f.write("[" * 200000)
        assert store.load() == []
        store.save([SplitRecord("Alice", "Bob", 1.0)])
        assert store.load() == [SplitRecord("Alice", "Bob", 1.0)]

    def test_unreadable_path_is_treated_as_absent(self, tmp_path):
        store = JsonBlobStore(str(tmp_path))  # a directory, not a file
        assert store.load() == []

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(records=records_strategy())
    def test_round_trip(self, store, records):
        store.save(records)
        assert store.load() == records

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=30)
    @given(
        name=st.text(alphabet="abcXYZ åéü-'", min_size=1, max_size=10),
        amount=amounts,
    )
    def test_round_trip_unusual_names(self, store, name, amount):
        records = [SplitRecord(name, "Bob", amount), SplitRecord("Bob", name, amount)]
        store.save(records)
        assert store.load() == records
