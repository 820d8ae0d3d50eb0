"""Tests for the helpers behind the /strings routes."""
import threading
from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace

import pytest

from string_analyzer.api.routes import lookup_string, register_string
from string_analyzer.database import get_store
from string_analyzer.exceptions import StoreNotInitializedError, StringAlreadyExistsError
from string_analyzer.utils import compute_sha256


def test_concurrent_duplicate_creates_store_one_record(store):
    workers = 8
    barrier = threading.Barrier(workers)

    def attempt():
        barrier.wait()
        try:
            register_string(store, "race")
            return 201
        except StringAlreadyExistsError:
            return 409

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda _: attempt(), range(workers)))

    assert results.count(201) == 1
    assert results.count(409) == workers - 1
    assert len(store.all()) == 1


def test_register_rejects_existing_value(store):
    register_string(store, "once")
    with pytest.raises(StringAlreadyExistsError):
        register_string(store, "once")


def test_lookup_by_hex_id_or_value(store):
    record = register_string(store, "lookup me")
    assert lookup_string(store, compute_sha256("lookup me")) == record
    assert lookup_string(store, "lookup me") == record
    assert lookup_string(store, "f" * 64) is None


def test_get_store_requires_open_store():
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(store=None)))
    with pytest.raises(StoreNotInitializedError):
        get_store(request)
