"""Tests for PatternBuilder and ResourceRegistry."""
import pytest

from aepmeta.api.pattern_builder import PatternBuilder
from aepmeta.errors import RegistrationError, ResourceCycleError
from aepmeta.schema.models import FieldType, Model, ModelField


def make_resource(registry, name, singular, plural, parent=None):
    model = Model(name, namespace="Test", parent=parent, fields=[ModelField("path", key=True)])
    registry.register(model, f"test.example.com/{singular}", singular, plural)
    return model


class TestPatternBuilder:
    """Test pattern construction."""

    def test_root_resource(self, registry, publisher):
        """Resource without parent gets a single segment pair."""
        builder = PatternBuilder(registry)
        assert builder.build_pattern(publisher) == "publishers/{publisher}"

    def test_child_resource(self, registry, book):
        """Child pattern starts with the parent pattern."""
        builder = PatternBuilder(registry)
        assert builder.build_pattern(book) == "publishers/{publisher}/books/{book}"

    def test_deep_chain(self, registry):
        """Three levels build root first."""
        shelf = make_resource(registry, "Shelf", "shelf", "shelves")
        book = make_resource(registry, "Book", "book", "books", parent=shelf)
        page = make_resource(registry, "Page", "page", "pages", parent=book)

        builder = PatternBuilder(registry)
        assert builder.build_pattern(page) == "shelves/{shelf}/books/{book}/pages/{page}"

    def test_parent_without_metadata_is_base_case(self, registry):
        """A non-resource parent ends the walk."""
        plain = Model("Plain", fields=[ModelField("name", FieldType.STRING)])
        child = make_resource(registry, "Child", "child", "children", parent=plain)

        assert PatternBuilder(registry).build_pattern(child) == "children/{child}"

    def test_non_resource_has_empty_pattern(self, registry):
        assert PatternBuilder(registry).build_pattern(Model("Plain")) == ""

    def test_explicit_metadata_is_used(self, registry, publisher):
        from aepmeta.schema.models import ResourceMetadata

        metadata = ResourceMetadata("x/press", "press", "presses")
        assert PatternBuilder(registry).build_pattern(publisher, metadata) == "presses/{press}"

    def test_cycle_detected(self, registry):
        """A parent loop raises instead of recursing forever."""
        a = make_resource(registry, "A", "a", "as")
        b = make_resource(registry, "B", "b", "bs", parent=a)
        a.parent = b

        with pytest.raises(ResourceCycleError) as exc_info:
            PatternBuilder(registry).build_pattern(b)

        assert exc_info.value.diagnostics[0].code == "aep-resource-cycle"
        assert exc_info.value.diagnostics[0].target == "Test.B"

    def test_depth_limit(self, registry):
        """Chains deeper than max_depth are rejected."""
        parent = None
        for i in range(5):
            parent = make_resource(registry, f"R{i}", f"r{i}", f"r{i}s", parent=parent)

        with pytest.raises(ResourceCycleError):
            PatternBuilder(registry, max_depth=3).build_pattern(parent)

        assert PatternBuilder(registry, max_depth=5).build_pattern(parent).count("/") == 9

    def test_resource_chain_order(self, registry, publisher, book):
        chain = PatternBuilder(registry).resource_chain(book)
        assert [model for model, _ in chain] == [publisher, book]

    def test_example_path(self):
        pattern = "publishers/{publisher}/books/{book}"
        assert PatternBuilder.example_path(pattern) == "publishers/my-publisher/books/my-book"


class TestResourceRegistry:
    """Test the resource metadata store."""

    def test_register_and_lookup(self, registry, publisher):
        metadata = registry.get_metadata(publisher)
        assert metadata.singular == "publisher"
        assert metadata.plural == "publishers"
        assert metadata.type == "library.example.com/publisher"
        assert registry.is_resource(publisher)

    def test_register_twice_fails(self, registry, publisher):
        with pytest.raises(RegistrationError):
            registry.register(publisher, "x", "y", "z")

    def test_identity_not_name(self, registry, publisher):
        """Same name in another namespace is a different model."""
        other = Model("Publisher", namespace="Archive")
        assert registry.get_metadata(other) is None
        assert not registry.is_resource(other)

    def test_missing_model(self, registry):
        assert registry.get_metadata(None) is None

    def test_filter_doc(self, registry, book):
        assert registry.get_collection_filter_doc(book) is None
        registry.set_collection_filter_doc(book, "Filter by title.")
        assert registry.get_collection_filter_doc(book) == "Filter by title."

    def test_resources_filter(self, registry, publisher, book, book_list_response):
        models = [book_list_response, book, publisher]
        assert registry.resources(models) == [book, publisher]
        assert len(registry) == 2
