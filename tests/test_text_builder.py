"""
Unit tests for operation text

Tests:
- TemplateEngine: Variable substitution and capitalized variants
- TextBuilder: Operation IDs, summaries, tags and descriptions per kind
"""

import pytest

from aepmeta.builder.template_engine import TemplateEngine, capitalize
from aepmeta.builder.text_builder import (
    OPERATION_TEXT,
    TextBuilder,
    model_description,
    tag_description,
    tag_name,
)
from aepmeta.schema.models import OperationKind, ResourceMetadata


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def widget():
    return ResourceMetadata("test.example.com/widget", "widget", "widgets")


# ============================================================================
# TEST: TemplateEngine
# ============================================================================


class TestTemplateEngine:
    """Tests for TemplateEngine class"""

    def test_variable_substitution(self):
        engine = TemplateEngine({"singular": "book"})
        assert engine.evaluate("Get ${singular}") == "Get book"

    def test_capitalized_variant(self):
        engine = TemplateEngine({"singular": "book"})
        assert engine.evaluate("Get${Singular}") == "GetBook"

    def test_missing_variable_renders_empty(self):
        engine = TemplateEngine({})
        assert engine.evaluate("Get${Singular}") == "Get"

    def test_non_string_passthrough(self):
        assert TemplateEngine().evaluate(42) == 42

    def test_update_context(self):
        engine = TemplateEngine()
        engine.update_context(plural="books")
        assert engine.evaluate("${Plural}/${plural}") == "Books/books"

    def test_capitalize(self):
        assert capitalize("widget") == "Widget"
        assert capitalize("bookShelf") == "BookShelf"
        assert capitalize("Widget") == "Widget"
        assert capitalize("") == ""
        assert capitalize("1st") == "1st"

    def test_capitalize_ascii_only(self):
        """Non-ASCII first characters are left alone."""
        assert capitalize("éclair") == "éclair"


# ============================================================================
# TEST: TextBuilder
# ============================================================================


class TestTextBuilder:
    """Tests for TextBuilder class"""

    @pytest.mark.parametrize(
        "kind, operation_id, summary",
        [
            (OperationKind.READ, "GetWidget", "Get Widget"),
            (OperationKind.LIST, "ListWidgets", "List Widgets"),
            (OperationKind.CREATE, "CreateWidget", "Create Widget"),
            (OperationKind.UPDATE, "UpdateWidget", "Update Widget"),
            (OperationKind.DELETE, "DeleteWidget", "Delete Widget"),
            (OperationKind.CREATE_OR_REPLACE, "ApplyWidget", "Apply Widget"),
        ],
    )
    def test_standard_kinds(self, widget, kind, operation_id, summary):
        text = TextBuilder().render(kind, widget)

        assert text.operation_id == operation_id
        assert text.summary == summary
        assert text.tag == "Widgets"

    def test_custom_action(self, widget):
        text = TextBuilder().render(OperationKind.CUSTOM_ACTION, widget, "archive")

        assert text.operation_id == ":ArchiveWidget"
        assert text.summary == "Archive Widget"
        assert text.tag == "Widgets"
        assert text.description == "Performs the archive action on a widget."

    def test_collection_action(self, widget):
        text = TextBuilder().render(OperationKind.COLLECTION_ACTION, widget, "sort")

        assert text.operation_id == ":SortWidgets"
        assert text.summary == "Sort Widgets"
        assert "widgets collection" in text.description

    def test_every_kind_has_one_sentence_description(self, widget):
        for kind in OperationKind:
            assert kind in OPERATION_TEXT
            description = TextBuilder().render(kind, widget, "archive").description
            assert description
            assert description.endswith(".")

    def test_list_description(self, widget):
        text = TextBuilder().render(OperationKind.LIST, widget)
        assert text.description == "Lists widgets with support for filtering, pagination, and sorting."

    def test_render_is_deterministic(self, widget):
        builder = TextBuilder()
        first = builder.render(OperationKind.UPDATE, widget)
        second = builder.render(OperationKind.UPDATE, widget)
        assert first == second

    def test_camel_case_names(self):
        metadata = ResourceMetadata("x/bookShelf", "bookShelf", "bookShelves")
        text = TextBuilder().render(OperationKind.LIST, metadata)
        assert text.operation_id == "ListBookShelves"
        assert text.tag == "BookShelves"

    def test_helpers(self, widget):
        assert tag_name(widget) == "Widgets"
        assert tag_description(widget) == "Operations for managing widgets."
        assert model_description(widget) == "A widget resource."
