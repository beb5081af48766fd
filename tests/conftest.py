"""Shared fixtures: a small library service with publishers and books."""

import pytest

from aepmeta.schema.models import (
    ActionDetails,
    FieldType,
    Model,
    ModelField,
    Namespace,
    Operation,
    OperationInterface,
    OperationKind,
    ResourceOperation,
    Service,
    ServiceGraph,
)
from aepmeta.schema.registry import ResourceRegistry


def crud_operations(model, list_response=None):
    """Standard operations on a resource, in declaration order"""
    operations = [
        Operation("get", ResourceOperation(OperationKind.READ, model)),
        Operation(
            "list",
            ResourceOperation(OperationKind.LIST, model),
            parameters=[ModelField("filter"), ModelField("page_token")],
            return_models=[list_response] if list_response else [],
        ),
        Operation("create", ResourceOperation(OperationKind.CREATE, model)),
        Operation("update", ResourceOperation(OperationKind.UPDATE, model)),
        Operation("delete", ResourceOperation(OperationKind.DELETE, model)),
        Operation("apply", ResourceOperation(OperationKind.CREATE_OR_REPLACE, model)),
    ]
    return operations


@pytest.fixture
def registry():
    return ResourceRegistry()


@pytest.fixture
def publisher(registry):
    model = Model(
        "Publisher",
        namespace="Library",
        fields=[
            ModelField("path", FieldType.STRING, key=True),
            ModelField("displayName", FieldType.STRING),
        ],
    )
    registry.register(model, "library.example.com/publisher", "publisher", "publishers")
    return model


@pytest.fixture
def book(registry, publisher):
    model = Model(
        "Book",
        namespace="Library",
        parent=publisher,
        fields=[
            ModelField("id", FieldType.STRING, key=True),
            ModelField("path", FieldType.STRING),
            ModelField("title", FieldType.STRING),
            ModelField("pages", FieldType.INT32),
            ModelField("price", FieldType.FLOAT64),
            ModelField("inPrint", FieldType.BOOLEAN),
            ModelField("published", FieldType.UTC_DATETIME),
            ModelField("authors", FieldType.ARRAY),
        ],
    )
    registry.register(model, "library.example.com/book", "book", "books")
    return model


@pytest.fixture
def book_list_response():
    return Model(
        "BookListResponse",
        namespace="Library",
        fields=[
            ModelField("results", FieldType.ARRAY),
            ModelField("next_page_token", FieldType.STRING),
        ],
    )


@pytest.fixture
def books_interface(book, book_list_response):
    operations = crud_operations(book, book_list_response)
    operations.append(Operation("archive", action=ActionDetails("archive")))
    operations.append(Operation("sort", collection_action=ActionDetails("sort")))
    return OperationInterface(
        "Books",
        operations,
        namespace="Library",
        source_template="AepResourceOperations<Book>",
    )


@pytest.fixture
def publishers_interface(publisher):
    return OperationInterface("Publishers", crud_operations(publisher), namespace="Library")


@pytest.fixture
def library_service(
    publisher,
    book,
    book_list_response,
    books_interface,
    publishers_interface,
):
    # Books is declared first on purpose: traversal order must not leak into tags
    namespace = Namespace(
        "Library",
        models=[book, book_list_response, publisher],
        interfaces=[books_interface, publishers_interface],
    )
    return Service("Library API", namespace)


@pytest.fixture
def library_graph(library_service):
    return ServiceGraph([library_service])


@pytest.fixture
def sample_document():
    """Service graph document equivalent to the library fixtures"""
    return {
        "services": [
            {
                "title": "Library API",
                "namespace": "Library",
                "models": [
                    {
                        "name": "Book",
                        "parent": "Publisher",
                        "resource": {
                            "type": "library.example.com/book",
                            "singular": "book",
                            "plural": "books",
                            "filterDoc": "Filter books by title or author.",
                        },
                        "fields": [
                            {"name": "path", "type": "string", "key": True},
                            {"name": "title", "type": "string", "example": "Dune"},
                            {"name": "pages", "type": "int32"},
                        ],
                    },
                    {
                        "name": "BookListResponse",
                        "fields": [
                            {"name": "results", "type": "array"},
                            {"name": "next_page_token", "type": "string"},
                        ],
                    },
                    {
                        "name": "Publisher",
                        "doc": "A company that publishes books.",
                        "resource": {
                            "type": "library.example.com/publisher",
                            "singular": "publisher",
                            "plural": "publishers",
                        },
                        "fields": [
                            {"name": "path", "type": "string", "key": True},
                            {"name": "displayName", "type": "string"},
                        ],
                    },
                ],
                "interfaces": [
                    {
                        "name": "Books",
                        "template": "AepResourceOperations<Book>",
                        "operations": [
                            {
                                "name": "list",
                                "resourceOperation": {"kind": "list", "resource": "Book"},
                                "parameters": [{"name": "filter", "type": "string"}],
                                "returns": ["BookListResponse"],
                            },
                            {
                                "name": "get",
                                "resourceOperation": {"kind": "read", "resource": "Book"},
                            },
                            {
                                "name": "archive",
                                "action": "archive",
                                "summary": "Archive a book",
                            },
                        ],
                    },
                    {
                        "name": "Publishers",
                        "operations": [
                            {
                                "name": "get",
                                "resourceOperation": {"kind": "read", "resource": "Publisher"},
                            },
                        ],
                    },
                ],
                "operations": [
                    {"name": "health"},
                ],
            }
        ]
    }
