"""Classify operations into AEP operation kinds."""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from aepmeta.schema.models import (
    STANDARD_KINDS,
    Model,
    Operation,
    OperationKind,
    ResourceMetadata,
)
from aepmeta.schema.registry import ResourceRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedOperation:
    """Result of classifying one operation"""

    kind: OperationKind
    operation: Operation
    model: Optional[Model] = None
    metadata: Optional[ResourceMetadata] = None
    action_name: Optional[str] = None

    @property
    def resolved(self) -> bool:
        """True when the owning resource is known"""
        return self.model is not None and self.metadata is not None


class OperationClassifier:
    """Maps operations to kinds, borrowing resource context from siblings"""

    def __init__(self, registry: ResourceRegistry):
        self.registry = registry

    def classify(self, operation: Operation) -> Optional[ClassifiedOperation]:
        """
        Classify an operation

        Checks, first match wins:
        1. Standard resource-operation tag on a resource model
        2. Action tag, resource found through a sibling
        3. Collection-action tag, resource found through a sibling

        Returns:
            ClassifiedOperation, or None for operations outside the AEP vocabulary
        """
        resource_op = operation.resource_operation
        if resource_op is not None:
            if resource_op.kind not in STANDARD_KINDS:
                logger.debug(f"Ignoring {operation.qualified_name}: kind {resource_op.kind}")
                return None
            metadata = self.registry.get_metadata(resource_op.resource)
            if metadata is None:
                return None
            return ClassifiedOperation(
                kind=resource_op.kind,
                operation=operation,
                model=resource_op.resource,
                metadata=metadata,
            )

        if operation.action is not None:
            return self._classify_action(
                operation, OperationKind.CUSTOM_ACTION, operation.action.name
            )

        if operation.collection_action is not None:
            return self._classify_action(
                operation, OperationKind.COLLECTION_ACTION, operation.collection_action.name
            )

        return None

    def _classify_action(
        self,
        operation: Operation,
        kind: OperationKind,
        name: str,
    ) -> ClassifiedOperation:
        resource = self.find_resource_for_operation(operation)
        if resource is None:
            logger.debug(f"No resource found for action {operation.qualified_name}")
            return ClassifiedOperation(kind=kind, operation=operation, action_name=name)

        model, metadata = resource
        return ClassifiedOperation(
            kind=kind,
            operation=operation,
            model=model,
            metadata=metadata,
            action_name=name,
        )

    def find_resource_for_operation(
        self,
        operation: Operation,
    ) -> Optional[Tuple[Model, ResourceMetadata]]:
        """
        Find the resource an operation belongs to by scanning its interface

        The first sibling, in declaration order, with a standard
        resource-operation tag on a resource model wins.
        """
        interface = operation.interface
        if interface is None:
            return None

        for sibling in interface.operations:
            resource_op = sibling.resource_operation
            if resource_op is None:
                continue
            metadata = self.registry.get_metadata(resource_op.resource)
            if metadata is not None:
                return resource_op.resource, metadata

        return None
