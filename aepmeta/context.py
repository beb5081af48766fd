"""Side table holding everything a validation pass derives.

Keys are graph entities themselves (identity hashed). Each writer replaces an
entity's record in a single assignment so a failure on one entity never
leaves another half written.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from aepmeta.schema.models import (
    Model,
    ModelField,
    Operation,
    OperationExample,
    Service,
)
from aepmeta.validator.diagnostics import Diagnostic


@dataclass
class TagMetadata:
    """Root-level tag description"""

    description: Optional[str] = None


@dataclass
class ModelMetadata:
    """Derived metadata for one resource model"""

    extension: Dict[str, Any]
    pattern: str
    description: Optional[str] = None  # Only set when none was authored


@dataclass
class OperationMetadata:
    """Derived metadata for one operation"""

    operation_id: Optional[str] = None
    tag: Optional[str] = None
    summary: Optional[str] = None  # Only set when none was authored
    description: Optional[str] = None
    examples: List[OperationExample] = field(default_factory=list)

    @property
    def error_examples(self) -> List[OperationExample]:
        return [
            example
            for example in self.examples
            if isinstance(example.return_type, dict) and "_" in example.return_type
        ]


class DerivationContext:
    """Mutable output of one or more validation passes"""

    def __init__(self):
        self.models: Dict[Model, ModelMetadata] = {}
        self.operations: Dict[Operation, OperationMetadata] = {}
        self.tags: Dict[Service, Dict[str, TagMetadata]] = {}
        self.field_examples: Dict[ModelField, List[Any]] = {}
        self.parameter_docs: Dict[ModelField, str] = {}
        self.service_diagnostics: Dict[Service, List[Diagnostic]] = {}

    # ------------------------------------------------------------------
    # Models and tags
    # ------------------------------------------------------------------

    def commit_model(self, model: Model, metadata: ModelMetadata) -> None:
        self.models[model] = metadata

    def get_model(self, model: Model) -> Optional[ModelMetadata]:
        return self.models.get(model)

    def ensure_tag(self, service: Service, name: str, description: str) -> None:
        """Register a tag once; later registrations keep the first description"""
        tags = self.tags.setdefault(service, {})
        if name not in tags:
            tags[name] = TagMetadata(description=description)

    def sort_tags(self, service: Service) -> None:
        tags = self.tags.get(service)
        if tags is None:
            return
        self.tags[service] = {name: tags[name] for name in sorted(tags)}

    def get_tags(self, service: Service) -> Dict[str, TagMetadata]:
        return self.tags.get(service, {})

    def set_diagnostics(self, service: Service, diagnostics: List[Diagnostic]) -> None:
        """Replace the non-fatal diagnostics recorded for a service"""
        self.service_diagnostics[service] = list(diagnostics)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return [d for ds in self.service_diagnostics.values() for d in ds]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def commit_operation(self, operation: Operation, metadata: OperationMetadata) -> None:
        self.operations[operation] = metadata

    def get_operation(self, operation: Operation) -> Optional[OperationMetadata]:
        return self.operations.get(operation)

    def effective_summary(self, operation: Operation) -> Optional[str]:
        """Authored summary when present, derived one otherwise"""
        if operation.summary:
            return operation.summary
        metadata = self.operations.get(operation)
        return metadata.summary if metadata else None

    # ------------------------------------------------------------------
    # Fields and parameters
    # ------------------------------------------------------------------

    def has_field_example(self, model_field: ModelField) -> bool:
        return model_field.has_example or model_field in self.field_examples

    def set_field_example(self, model_field: ModelField, value: Any) -> None:
        self.field_examples.setdefault(model_field, []).append(value)

    def get_field_examples(self, model_field: ModelField) -> List[Any]:
        return self.field_examples.get(model_field, [])

    def set_parameter_doc(self, parameter: ModelField, doc: str) -> None:
        self.parameter_docs[parameter] = doc
