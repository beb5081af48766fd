"""
Field Builder - Example values for individual model fields

Supports:
- Declared examples (always win)
- Identity (key) fields: "my-<singular>"
- The `path` field: the resource pattern with every {param} filled in
- Scalar defaults by declared type
"""

import logging
from typing import Any, Optional, Tuple

from aepmeta.api.pattern_builder import PatternBuilder
from aepmeta.schema.models import FieldType, Model, ModelField, ResourceMetadata
from .template_engine import capitalize

logger = logging.getLogger(__name__)

EXAMPLE_INTEGER = 100
EXAMPLE_FLOAT = 99.99
EXAMPLE_TIMESTAMP = "2024-01-15T10:30:00Z"

PATH_FIELD = "path"


def generate_example_value(model_field: ModelField) -> Optional[Any]:
    """
    Generic example for a field based on its declared scalar type

    Returns:
        Example value, or None when the type has no sensible example
    """
    field_type = model_field.type

    if field_type == FieldType.STRING:
        return f"Example {capitalize(model_field.name)}"
    elif field_type in (FieldType.INT32, FieldType.INT64):
        return EXAMPLE_INTEGER
    elif field_type in (FieldType.FLOAT32, FieldType.FLOAT64):
        return EXAMPLE_FLOAT
    elif field_type == FieldType.BOOLEAN:
        return True
    elif field_type == FieldType.UTC_DATETIME:
        return EXAMPLE_TIMESTAMP

    return None


def key_example(metadata: ResourceMetadata) -> str:
    return f"my-{metadata.singular}"


class FieldBuilder:
    """Builds example values for the fields of a resource model"""

    def __init__(self, pattern_builder: PatternBuilder):
        """
        Initialize FieldBuilder

        Args:
            pattern_builder: Used to derive examples for `path` fields
        """
        self.pattern_builder = pattern_builder

    def is_identity_field(self, model_field: ModelField) -> bool:
        """Key and path fields, both left out of update bodies"""
        return model_field.key or model_field.name == PATH_FIELD

    def build_field(
        self,
        model_field: ModelField,
        model: Model,
        metadata: ResourceMetadata,
    ) -> Tuple[str, Optional[Any]]:
        """
        Build the example for a single field

        Args:
            model_field: Field to build
            model: Resource model owning the field
            metadata: Resource metadata of that model

        Returns:
            Tuple of (field_name, example_value); value is None when omitted
        """
        if model_field.has_example:
            return model_field.name, model_field.example

        if model_field.key:
            return model_field.name, key_example(metadata)

        if model_field.name == PATH_FIELD:
            pattern = self.pattern_builder.build_pattern(model, metadata)
            return model_field.name, PatternBuilder.example_path(pattern)

        value = generate_example_value(model_field)
        if value is None:
            logger.debug(
                f"No example for {model.qualified_name}.{model_field.name} "
                f"({model_field.type.value})"
            )
        return model_field.name, value
