"""Tests for opscope.definitions — the built-in table and shared catalog."""

import threading

import pytest

from opscope import definitions
from opscope.catalog import OperationCatalog
from opscope.definitions import DEFINITIONS, default_catalog


class TestTable:
    def test_keys_unique(self) -> None:
        keys = [d.key for d in DEFINITIONS]
        assert len(keys) == len(set(keys))

    def test_suffix_convention(self) -> None:
        for definition in DEFINITIONS:
            if definition.key.endswith(".user"):
                assert not definition.children
            if definition.urls:
                assert definition.key.endswith((".admin", ".user"))

    def test_admin_urls_under_admin_prefix(self) -> None:
        for definition in DEFINITIONS:
            if definition.key.endswith(".admin"):
                assert all(url.startswith("/v1/admin/") for url in definition.urls)


class TestDefaultCatalog:
    def test_shared_instance(self) -> None:
        assert default_catalog() is default_catalog()

    def test_built_from_table(self) -> None:
        assert default_catalog().keys() == tuple(d.key for d in DEFINITIONS)

    def test_built_once_under_concurrent_access(self, monkeypatch: pytest.MonkeyPatch) -> None:
        builds: list[OperationCatalog] = []

        def counting(defs):
            catalog = OperationCatalog(defs)
            builds.append(catalog)
            return catalog

        monkeypatch.setattr(definitions, "_catalog", None)
        monkeypatch.setattr(definitions, "OperationCatalog", counting)

        barrier = threading.Barrier(8)
        results: list[OperationCatalog] = []
        results_lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            catalog = default_catalog()
            with results_lock:
                results.append(catalog)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(builds) == 1
        assert len(results) == 8
        assert all(catalog is builds[0] for catalog in results)

    def test_failed_build_is_retried(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[int] = []

        def flaky(defs):
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            return OperationCatalog(defs)

        monkeypatch.setattr(definitions, "_catalog", None)
        monkeypatch.setattr(definitions, "OperationCatalog", flaky)

        with pytest.raises(RuntimeError):
            default_catalog()
        assert isinstance(default_catalog(), OperationCatalog)
        assert len(calls) == 2
