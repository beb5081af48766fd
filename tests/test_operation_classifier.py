"""Tests for OperationClassifier."""
import pytest

from aepmeta.api.operation_classifier import OperationClassifier
from aepmeta.schema.models import (
    ActionDetails,
    Model,
    Operation,
    OperationInterface,
    OperationKind,
    ResourceOperation,
)


class TestOperationClassifier:
    """Test classification of operations."""

    @pytest.mark.parametrize(
        "name, kind",
        [
            ("get", OperationKind.READ),
            ("list", OperationKind.LIST),
            ("create", OperationKind.CREATE),
            ("update", OperationKind.UPDATE),
            ("delete", OperationKind.DELETE),
            ("apply", OperationKind.CREATE_OR_REPLACE),
        ],
    )
    def test_standard_operations(self, registry, book, books_interface, name, kind):
        classified = OperationClassifier(registry).classify(books_interface.get_operation(name))

        assert classified.kind == kind
        assert classified.model is book
        assert classified.metadata.singular == "book"
        assert classified.resolved

    def test_custom_action_sibling_inference(self, registry, book, books_interface):
        """An action borrows its resource from a CRUD sibling."""
        classified = OperationClassifier(registry).classify(
            books_interface.get_operation("archive")
        )

        assert classified.kind == OperationKind.CUSTOM_ACTION
        assert classified.action_name == "archive"
        assert classified.model is book

    def test_collection_action_sibling_inference(self, registry, book, books_interface):
        classified = OperationClassifier(registry).classify(
            books_interface.get_operation("sort")
        )

        assert classified.kind == OperationKind.COLLECTION_ACTION
        assert classified.action_name == "sort"
        assert classified.model is book

    def test_action_with_only_read_sibling(self, registry, publisher):
        """A single read sibling is enough to resolve the action."""
        interface = OperationInterface("Publishers", [
            Operation("archive", action=ActionDetails("archive")),
            Operation("get", ResourceOperation(OperationKind.READ, publisher)),
        ])

        classified = OperationClassifier(registry).classify(interface.operations[0])
        assert classified.model is publisher

    def test_first_resolvable_sibling_wins(self, registry, publisher, book):
        plain = Model("Plain")
        interface = OperationInterface("Mixed", [
            Operation("plainGet", ResourceOperation(OperationKind.READ, plain)),
            Operation("bookGet", ResourceOperation(OperationKind.READ, book)),
            Operation("publisherGet", ResourceOperation(OperationKind.READ, publisher)),
            Operation("archive", action=ActionDetails("archive")),
        ])

        classified = OperationClassifier(registry).classify(interface.operations[3])
        assert classified.model is book

    def test_action_without_sibling_is_unresolved(self, registry):
        interface = OperationInterface("Orphans", [
            Operation("archive", action=ActionDetails("archive")),
        ])

        classified = OperationClassifier(registry).classify(interface.operations[0])
        assert classified.kind == OperationKind.CUSTOM_ACTION
        assert not classified.resolved
        assert classified.model is None

    def test_action_outside_interface_is_unresolved(self, registry):
        classified = OperationClassifier(registry).classify(
            Operation("archive", action=ActionDetails("archive"))
        )
        assert not classified.resolved

    def test_untagged_operation_ignored(self, registry):
        assert OperationClassifier(registry).classify(Operation("health")) is None

    def test_standard_operation_on_non_resource_ignored(self, registry):
        operation = Operation("get", ResourceOperation(OperationKind.READ, Model("Plain")))
        assert OperationClassifier(registry).classify(operation) is None

    def test_action_kind_on_resource_tag_ignored(self, registry, book):
        operation = Operation("odd", ResourceOperation(OperationKind.CUSTOM_ACTION, book))
        assert OperationClassifier(registry).classify(operation) is None

    def test_find_resource_for_operation(self, registry, book, books_interface):
        classifier = OperationClassifier(registry)
        model, metadata = classifier.find_resource_for_operation(
            books_interface.get_operation("archive")
        )
        assert model is book
        assert metadata.plural == "books"
