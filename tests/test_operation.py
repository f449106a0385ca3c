"""Tests for opscope.operation — node and definition dataclasses."""

import pytest

from opscope.catalog import OperationCatalog
from opscope.operation import Operation, OperationDefinition


@pytest.fixture
def catalog() -> OperationCatalog:
    return OperationCatalog([
        OperationDefinition("docs.user", urls=("/v1/docs/**",)),
        OperationDefinition("docs.admin", urls=("/v1/admin/docs/**",), children=("docs.user",)),
        OperationDefinition("docs", children=("docs.user", "docs.admin")),
    ])


class TestOperationDefinition:
    def test_defaults(self) -> None:
        definition = OperationDefinition("docs")
        assert definition.urls == ()
        assert definition.children == ()

    def test_frozen(self) -> None:
        definition = OperationDefinition("docs")
        with pytest.raises(AttributeError):
            definition.key = "other"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert OperationDefinition("a", urls=("/a",)) == OperationDefinition("a", urls=("/a",))


class TestOperation:
    def test_frozen(self, catalog: OperationCatalog) -> None:
        with pytest.raises(AttributeError):
            catalog.lookup("docs").key = "other"  # type: ignore[misc]

    def test_identity_equality(self, catalog: OperationCatalog) -> None:
        other = OperationCatalog([OperationDefinition("docs.user", urls=("/v1/docs/**",))])
        assert catalog.lookup("docs.user") == catalog.lookup("docs.user")
        assert catalog.lookup("docs.user") != other.lookup("docs.user")

    def test_repr_omits_children(self, catalog: OperationCatalog) -> None:
        assert repr(catalog.lookup("docs")) == "Operation(key='docs', urls=())"

    def test_matches_url(self, catalog: OperationCatalog) -> None:
        admin = catalog.lookup("docs.admin")
        assert admin.matches_url("/v1/admin/docs/1")
        assert not admin.matches_url("/v1/docs/1")
        assert admin.matches_url_recursive("/v1/docs/1")

    def test_walk_pre_order(self, catalog: OperationCatalog) -> None:
        keys = [op.key for op in catalog.lookup("docs").walk()]
        assert keys == ["docs", "docs.user", "docs.admin", "docs.user"]

    def test_bare_node_compiles_default_wildcard(self) -> None:
        node = Operation(key="orphan", urls=("/v1/orphan/**",))
        assert node.matches_url("/v1/orphan/1")
        assert node.prefixes[0].prefix == "/v1/orphan/"

    def test_bare_node_rejects_string_urls(self) -> None:
        with pytest.raises(TypeError, match="tuple of strings"):
            Operation(key="orphan", urls="/v1/orphan/**")  # type: ignore[arg-type]

    def test_bare_node_rejects_bare_wildcard(self) -> None:
        with pytest.raises(ValueError, match="no literal prefix"):
            Operation(key="orphan", urls=("**",))
