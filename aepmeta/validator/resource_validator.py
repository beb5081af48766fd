"""Precondition checks on resource models."""
import logging
from typing import List

from aepmeta.api.pattern_builder import PatternBuilder
from aepmeta.errors import ResourceCycleError
from aepmeta.schema.models import Model, Service
from aepmeta.schema.registry import ResourceRegistry
from aepmeta.validator.diagnostics import Diagnostic, Severity

logger = logging.getLogger(__name__)


class ResourceValidator:
    """Validates resource models before metadata is derived."""

    def __init__(self, registry: ResourceRegistry, max_depth: int = 32):
        self.registry = registry
        self.pattern_builder = PatternBuilder(registry, max_depth)

    def validate(self, service: Service) -> List[Diagnostic]:
        """Validate every resource model in a service."""
        diagnostics = []

        for model in service.namespace.all_models():
            if self.registry.is_resource(model):
                diagnostics.extend(self.validate_model(model))

        return diagnostics

    def validate_model(self, model: Model) -> List[Diagnostic]:
        """Validate one resource model."""
        diagnostics = []
        target = model.qualified_name

        if not model.key_fields():
            diagnostics.append(Diagnostic(
                code="aep-resource-requires-key",
                severity=Severity.ERROR,
                message="AEP resource must have a key field.",
                target=target,
            ))

        if model.get_field("path") is None:
            diagnostics.append(Diagnostic(
                code="aep-resource-requires-path",
                severity=Severity.WARNING,
                message="AEP resource should have a 'path' field of type string per AEP-0004.",
                target=target,
            ))

        parent = model.parent
        if parent is not None and not self.registry.is_resource(parent):
            diagnostics.append(Diagnostic(
                code="aep-parent-not-resource",
                severity=Severity.ERROR,
                message=f"Parent {parent.qualified_name} is not an AEP resource.",
                target=target,
            ))

        try:
            self.pattern_builder.resource_chain(model)
        except ResourceCycleError as e:
            diagnostics.extend(e.diagnostics)

        return diagnostics
