"""
Graph Analyzer - Builds the object graph from a service graph document.

Supports:
- Nested namespaces
- Model references by qualified or simple name (searched outward)
- Forward references (parents and resources resolved after all models exist)
- Resource annotations registered into a ResourceRegistry
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from aepmeta.errors import GraphLoadError
from aepmeta.schema.models import (
    STANDARD_KINDS,
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

logger = logging.getLogger(__name__)


class GraphAnalyzer:
    """Turns decoded documents into a ServiceGraph"""

    def __init__(self, registry: Optional[ResourceRegistry] = None):
        self.registry = registry if registry is not None else ResourceRegistry()
        self._models: Dict[str, Model] = {}
        # Deferred work: needs every model of the service to exist first
        self._pending_models: List[Tuple[Model, Dict[str, Any]]] = []
        self._pending_operations: List[Tuple[Operation, Dict[str, Any], str]] = []

    def analyze(self, document: Dict[str, Any]) -> ServiceGraph:
        """
        Analyze a service graph document

        Args:
            document: Decoded document with a "services" list

        Returns:
            ServiceGraph with resource metadata registered on the registry

        Raises:
            GraphLoadError: On unknown references or malformed entries
        """
        services = document.get("services")
        if not isinstance(services, list):
            raise GraphLoadError("Service graph document has no 'services' list")

        graph = ServiceGraph()
        for service_doc in services:
            graph.services.append(self._analyze_service(service_doc))

        logger.info(f"Analyzed {len(graph.services)} services")
        return graph

    def _analyze_service(self, service_doc: Dict[str, Any]) -> Service:
        self._models = {}
        self._pending_models = []
        self._pending_operations = []

        name = service_doc.get("namespace") or service_doc.get("title") or "Service"
        namespace = self._analyze_namespace(service_doc, name)

        for model, model_doc in self._pending_models:
            self._resolve_model(model, model_doc)
        for operation, operation_doc, scope in self._pending_operations:
            self._resolve_operation(operation, operation_doc, scope)

        return Service(title=service_doc.get("title", name), namespace=namespace)

    def _analyze_namespace(self, namespace_doc: Dict[str, Any], qualified: str) -> Namespace:
        namespace = Namespace(name=qualified)

        for model_doc in namespace_doc.get("models", []):
            model = self._create_model(model_doc, qualified)
            namespace.models.append(model)

        for interface_doc in namespace_doc.get("interfaces", []):
            interface = OperationInterface(
                name=self._require(interface_doc, "name", "interface"),
                namespace=qualified,
                source_template=interface_doc.get("template"),
            )
            for operation_doc in interface_doc.get("operations", []):
                interface.add_operation(self._create_operation(operation_doc, qualified))
            namespace.interfaces.append(interface)

        for operation_doc in namespace_doc.get("operations", []):
            namespace.operations.append(self._create_operation(operation_doc, qualified))

        for child_doc in namespace_doc.get("namespaces", []):
            child_name = self._require(child_doc, "name", "namespace")
            namespace.namespaces.append(
                self._analyze_namespace(child_doc, f"{qualified}.{child_name}")
            )

        return namespace

    # ------------------------------------------------------------------
    # Models
    # ------------------------------------------------------------------

    def _create_model(self, model_doc: Dict[str, Any], namespace: str) -> Model:
        model = Model(
            name=self._require(model_doc, "name", "model"),
            namespace=namespace,
            fields=[self._create_field(f) for f in model_doc.get("fields", [])],
            doc=model_doc.get("doc"),
        )

        if model.qualified_name in self._models:
            raise GraphLoadError(f"Duplicate model: {model.qualified_name}")
        self._models[model.qualified_name] = model
        self._pending_models.append((model, model_doc))
        return model

    def _create_field(self, field_doc: Dict[str, Any]) -> ModelField:
        name = self._require(field_doc, "name", "field")
        key = field_doc.get("key", False)
        if not isinstance(key, bool):
            raise GraphLoadError(f"Field {name}: 'key' must be a boolean")

        return ModelField(
            name=name,
            type=FieldType.parse(field_doc.get("type")),
            key=key,
            example=field_doc.get("example"),
            doc=field_doc.get("doc"),
        )

    def _resolve_model(self, model: Model, model_doc: Dict[str, Any]) -> None:
        parent_ref = model_doc.get("parent")
        if parent_ref:
            model.parent = self._lookup_model(parent_ref, model.namespace)

        resource = model_doc.get("resource")
        if resource:
            self.registry.register(
                model,
                type=self._require(resource, "type", f"resource {model.qualified_name}"),
                singular=self._require(resource, "singular", f"resource {model.qualified_name}"),
                plural=self._require(resource, "plural", f"resource {model.qualified_name}"),
            )
            if resource.get("filterDoc"):
                self.registry.set_collection_filter_doc(model, resource["filterDoc"])

    def _lookup_model(self, ref: str, scope: str) -> Model:
        """
        Resolve a model reference from a namespace scope

        Tries the qualified name first, then ``<scope>.<ref>`` for the scope
        and each enclosing namespace.
        """
        if ref in self._models:
            return self._models[ref]

        parts = scope.split(".") if scope else []
        while parts:
            candidate = ".".join(parts + [ref])
            if candidate in self._models:
                return self._models[candidate]
            parts.pop()

        raise GraphLoadError(f"Unknown model reference '{ref}' in {scope or 'root'}")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _create_operation(self, operation_doc: Dict[str, Any], scope: str) -> Operation:
        name = self._require(operation_doc, "name", "operation")
        tags = [
            key for key in ("resourceOperation", "action", "collectionAction")
            if operation_doc.get(key)
        ]
        if len(tags) > 1:
            raise GraphLoadError(
                f"Operation {name} carries more than one of {', '.join(tags)}"
            )

        operation = Operation(
            name=name,
            summary=operation_doc.get("summary"),
            parameters=[self._create_field(p) for p in operation_doc.get("parameters", [])],
        )
        if operation_doc.get("action"):
            operation.action = ActionDetails(name=operation_doc["action"])
        if operation_doc.get("collectionAction"):
            operation.collection_action = ActionDetails(name=operation_doc["collectionAction"])

        self._pending_operations.append((operation, operation_doc, scope))
        return operation

    def _resolve_operation(
        self,
        operation: Operation,
        operation_doc: Dict[str, Any],
        scope: str,
    ) -> None:
        resource_op = operation_doc.get("resourceOperation")
        if resource_op:
            kind_name = self._require(resource_op, "kind", f"operation {operation.name}")
            kind = self._parse_kind(kind_name, operation.name)
            resource_ref = self._require(resource_op, "resource", f"operation {operation.name}")
            operation.resource_operation = ResourceOperation(
                kind=kind,
                resource=self._lookup_model(resource_ref, scope),
            )

        operation.return_models = [
            self._lookup_model(ref, scope) for ref in operation_doc.get("returns", [])
        ]

    @staticmethod
    def _parse_kind(kind_name: str, operation_name: str) -> OperationKind:
        for kind in STANDARD_KINDS:
            if kind.value == kind_name:
                return kind
        raise GraphLoadError(
            f"Unknown resource operation kind '{kind_name}' on {operation_name}"
        )

    @staticmethod
    def _require(doc: Dict[str, Any], key: str, what: str) -> Any:
        value = doc.get(key)
        if value is None or value == "":
            raise GraphLoadError(f"Missing '{key}' on {what}")
        return value
