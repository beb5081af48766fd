"""
Payload Builder - Example request/response payloads per operation kind

Integrates:
- FieldBuilder: Field-level example values
- PatternBuilder: Path parameters collected along the parent chain
- Fixed error examples for the standard failure statuses
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from aepmeta.api.pattern_builder import PatternBuilder
from aepmeta.context import DerivationContext
from aepmeta.schema.models import (
    Model,
    Operation,
    OperationExample,
    OperationKind,
    ResourceMetadata,
)
from .field_builder import FieldBuilder, key_example

logger = logging.getLogger(__name__)

MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"
RESULTS_FIELD = "results"
NEXT_PAGE_TOKEN_FIELD = "next_page_token"


@dataclass(frozen=True)
class ErrorStatus:
    """A standard failure status and its problem-details text"""

    code: int
    title: str
    detail: str

    @property
    def slug(self) -> str:
        return self.title.lower().replace(" ", "-")


ERROR_STATUSES = [
    ErrorStatus(400, "Bad Request", "The request was invalid."),
    ErrorStatus(401, "Unauthorized", "Authentication is required."),
    ErrorStatus(403, "Forbidden", "Permission denied."),
    ErrorStatus(404, "Not Found", "The resource was not found."),
    ErrorStatus(409, "Conflict", "The resource already exists."),
    ErrorStatus(500, "Internal Server Error", "An internal error occurred."),
]


class PayloadBuilder:
    """
    Builds example payloads for classified operations

    Usage:
    ```python
    builder = PayloadBuilder(PatternBuilder(registry))
    example = builder.build(OperationKind.READ, book_model, book_metadata)
    # example.parameters == {"publisher": "my-publisher", "book": "my-book"}
    ```
    """

    def __init__(
        self,
        pattern_builder: PatternBuilder,
        error_type_base_url: str = "https://example.com/errors",
    ):
        """
        Initialize PayloadBuilder

        Args:
            pattern_builder: Pattern builder sharing the resource registry
            error_type_base_url: Prefix for the `type` URI of error examples
        """
        self.pattern_builder = pattern_builder
        self.field_builder = FieldBuilder(pattern_builder)
        self.error_type_base_url = error_type_base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Resource bodies and path parameters
    # ------------------------------------------------------------------

    def build_resource_example(
        self,
        model: Model,
        metadata: ResourceMetadata,
        include_key: bool = True,
    ) -> Dict[str, Any]:
        """
        Example object for a resource model

        Args:
            model: Resource model
            metadata: Its resource metadata
            include_key: False leaves out key and `path` fields (update bodies)
        """
        example = {}

        for model_field in model.fields:
            if not include_key and self.field_builder.is_identity_field(model_field):
                continue

            name, value = self.field_builder.build_field(model_field, model, metadata)
            if value is not None:
                example[name] = value

        return example

    def collect_path_params(
        self,
        model: Model,
        metadata: ResourceMetadata,
    ) -> Dict[str, Any]:
        """Path parameters from the root ancestor down to the model itself"""
        chain = self.pattern_builder.resource_chain(model, metadata)
        return {meta.singular: key_example(meta) for _, meta in chain}

    def collect_parent_params(self, model: Model) -> Dict[str, Any]:
        """Path parameters of the model's ancestors only"""
        registry = self.pattern_builder.registry
        parent = registry.parent_of(model)
        parent_meta = registry.get_metadata(parent)
        if parent is None or parent_meta is None:
            return {}
        return self.collect_path_params(parent, parent_meta)

    # ------------------------------------------------------------------
    # Per-kind examples
    # ------------------------------------------------------------------

    def build(
        self,
        kind: OperationKind,
        model: Model,
        metadata: ResourceMetadata,
    ) -> Optional[OperationExample]:
        """
        Build the success example for an operation kind

        Custom and collection actions reuse the read shape.

        Returns:
            OperationExample, or None for an unknown kind
        """
        if kind in (
            OperationKind.READ,
            OperationKind.CUSTOM_ACTION,
            OperationKind.COLLECTION_ACTION,
        ):
            return OperationExample(
                parameters=self.collect_path_params(model, metadata),
                return_type=self.build_resource_example(model, metadata),
            )

        elif kind == OperationKind.LIST:
            return OperationExample(
                parameters=self.collect_parent_params(model),
                return_type=self.build_list_response(model, metadata),
            )

        elif kind == OperationKind.CREATE:
            parameters = self.collect_parent_params(model)
            parameters["resource"] = self.build_resource_example(model, metadata)
            return OperationExample(
                parameters=parameters,
                return_type=self.build_resource_example(model, metadata),
            )

        elif kind == OperationKind.UPDATE:
            parameters = self.collect_path_params(model, metadata)
            parameters["contentType"] = MERGE_PATCH_CONTENT_TYPE
            parameters["resource"] = self.build_resource_example(
                model, metadata, include_key=False
            )
            return OperationExample(
                parameters=parameters,
                return_type=self.build_resource_example(model, metadata),
            )

        elif kind == OperationKind.DELETE:
            # No content response
            return OperationExample(parameters=self.collect_path_params(model, metadata))

        elif kind == OperationKind.CREATE_OR_REPLACE:
            parameters = self.collect_path_params(model, metadata)
            parameters["resource"] = self.build_resource_example(model, metadata)
            return OperationExample(
                parameters=parameters,
                return_type=self.build_resource_example(model, metadata),
            )

        logger.warning(f"No example shape for operation kind: {kind}")
        return None

    def build_list_response(
        self,
        model: Model,
        metadata: ResourceMetadata,
    ) -> Dict[str, Any]:
        return {
            RESULTS_FIELD: [self.build_resource_example(model, metadata)],
            NEXT_PAGE_TOKEN_FIELD: "",
        }

    def build_error_examples(self) -> List[OperationExample]:
        """One example per standard failure status, same for every operation"""
        examples = []

        for status in ERROR_STATUSES:
            examples.append(OperationExample(return_type={
                "_": status.code,
                "type": f"{self.error_type_base_url}/{status.slug}",
                "title": status.title,
                "status": status.code,
                "detail": status.detail,
            }))

        return examples

    # ------------------------------------------------------------------
    # Schema-level examples
    # ------------------------------------------------------------------

    def attach_list_results_example(
        self,
        operation: Operation,
        model: Model,
        metadata: ResourceMetadata,
        context: DerivationContext,
    ) -> bool:
        """
        Set field examples on a list operation's response model

        Only the first response variant with a `results` field is touched, and
        only when that field has no example yet.

        Returns:
            True when examples were attached
        """
        for response_model in operation.return_models:
            results_field = response_model.get_field(RESULTS_FIELD)
            if results_field is None:
                continue

            if context.has_field_example(results_field):
                return False

            context.set_field_example(
                results_field, [self.build_resource_example(model, metadata)]
            )
            next_page_token = response_model.get_field(NEXT_PAGE_TOKEN_FIELD)
            if next_page_token is not None:
                context.set_field_example(next_page_token, "")
            return True

        return False
