"""
Validation Pass - Derives AEP metadata for every service in a graph

Per service:
1. Precondition checks (fatal errors abort before anything is written)
2. Model sweep: pattern, resource extension, fallback description, tag
3. Tag finalization: tags sorted by name
4. Operation sweep: every operation of every interface, then loose operations
"""

import logging
from typing import Optional

from config import DerivationConfig
from aepmeta.api.operation_classifier import ClassifiedOperation, OperationClassifier
from aepmeta.api.pattern_builder import PatternBuilder
from aepmeta.builder.payload_builder import PayloadBuilder
from aepmeta.builder.text_builder import (
    TextBuilder,
    model_description,
    tag_description,
    tag_name,
)
from aepmeta.context import DerivationContext, ModelMetadata, OperationMetadata
from aepmeta.errors import PreconditionError
from aepmeta.schema.models import (
    Model,
    Operation,
    OperationKind,
    Service,
    ServiceGraph,
)
from aepmeta.schema.registry import ResourceRegistry
from aepmeta.validator.resource_validator import ResourceValidator

logger = logging.getLogger(__name__)

FILTER_PARAMETER = "filter"


class ValidationPass:
    """
    Runs the model and operation sweeps over a service graph

    Usage:
    ```python
    registry = ResourceRegistry()
    graph = GraphAnalyzer(registry).analyze(document)
    context = ValidationPass(registry).run(graph)
    context.get_operation(op).operation_id  # "GetBook"
    ```
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        config: Optional[DerivationConfig] = None,
    ):
        """
        Initialize ValidationPass

        Args:
            registry: Resource metadata attached to the graph's models
            config: Derivation settings (defaults when omitted)
        """
        self.registry = registry
        self.config = config or DerivationConfig()
        self.pattern_builder = PatternBuilder(registry, self.config.max_parent_depth)
        self.classifier = OperationClassifier(registry)
        self.text_builder = TextBuilder()
        self.payload_builder = PayloadBuilder(
            self.pattern_builder, self.config.error_type_base_url
        )
        self.validator = ResourceValidator(registry, self.config.max_parent_depth)

    def run(
        self,
        graph: ServiceGraph,
        context: Optional[DerivationContext] = None,
    ) -> DerivationContext:
        """
        Derive metadata for every service

        Args:
            graph: Fully resolved service graph
            context: Existing context to write into (new one when omitted)

        Returns:
            The context holding all derived metadata

        Raises:
            PreconditionError: If a service has error diagnostics
        """
        context = context if context is not None else DerivationContext()

        for service in graph.services:
            self.run_service(service, context)

        logger.info(
            f"Derived metadata for {len(context.models)} resources and "
            f"{len(context.operations)} operations"
        )
        return context

    def run_service(self, service: Service, context: DerivationContext) -> None:
        """Run every step for a single service"""
        logger.info(f"Validating service {service.title}")

        self.check_preconditions(service, context)

        for model in service.namespace.all_models():
            self.process_model(service, model, context)

        context.sort_tags(service)

        for interface in service.namespace.all_interfaces():
            for operation in interface.operations:
                self.process_operation(operation, context)

        for operation in service.namespace.all_operations():
            self.process_operation(operation, context)

    def check_preconditions(self, service: Service, context: DerivationContext) -> None:
        """
        Raises:
            PreconditionError: On error diagnostics, or warnings when
                fail_on_warnings is set
        """
        diagnostics = self.validator.validate(service)
        fatal = [
            d for d in diagnostics
            if d.is_error or self.config.fail_on_warnings
        ]
        if fatal:
            raise PreconditionError(fatal)

        for diagnostic in diagnostics:
            logger.warning(str(diagnostic))
        context.set_diagnostics(service, diagnostics)

    # ------------------------------------------------------------------
    # Model sweep
    # ------------------------------------------------------------------

    def process_model(
        self,
        service: Service,
        model: Model,
        context: DerivationContext,
    ) -> None:
        metadata = self.registry.get_metadata(model)
        if metadata is None:
            return

        pattern = self.pattern_builder.build_pattern(model, metadata)
        extension = {
            "type": metadata.type,
            "singular": metadata.singular,
            "plural": metadata.plural,
            "patterns": [pattern],
        }
        description = None if model.doc else model_description(metadata)

        context.commit_model(model, ModelMetadata(
            extension=extension,
            pattern=pattern,
            description=description,
        ))
        context.ensure_tag(service, tag_name(metadata), tag_description(metadata))
        logger.debug(f"Resource {model.qualified_name}: {pattern}")

    # ------------------------------------------------------------------
    # Operation sweep
    # ------------------------------------------------------------------

    def process_operation(self, operation: Operation, context: DerivationContext) -> None:
        classified = self.classifier.classify(operation)
        if classified is None:
            return

        metadata = self.build_operation_metadata(classified)
        context.commit_operation(operation, metadata)

        if classified.kind == OperationKind.LIST:
            self.apply_list_extras(classified, context)

        logger.debug(
            f"Operation {operation.qualified_name}: "
            f"{classified.kind.value} -> {metadata.operation_id}"
        )

    def build_operation_metadata(self, classified: ClassifiedOperation) -> OperationMetadata:
        """Everything derived for one operation, computed before it is committed"""
        operation = classified.operation
        metadata = OperationMetadata()

        if classified.resolved:
            text = self.text_builder.render(
                classified.kind, classified.metadata, classified.action_name
            )
            metadata.operation_id = text.operation_id
            metadata.tag = text.tag
            metadata.description = text.description
            if not operation.summary:
                metadata.summary = text.summary

            example = self.payload_builder.build(
                classified.kind, classified.model, classified.metadata
            )
            if example is not None:
                metadata.examples.append(example)

        metadata.examples.extend(self.payload_builder.build_error_examples())
        return metadata

    def apply_list_extras(
        self,
        classified: ClassifiedOperation,
        context: DerivationContext,
    ) -> None:
        """Response field examples and the authored filter description"""
        self.payload_builder.attach_list_results_example(
            classified.operation, classified.model, classified.metadata, context
        )

        filter_doc = self.registry.get_collection_filter_doc(classified.model)
        if filter_doc:
            filter_param = classified.operation.get_parameter(FILTER_PARAMETER)
            if filter_param is not None:
                context.set_parameter_doc(filter_param, filter_doc)


def on_validate(
    graph: ServiceGraph,
    registry: ResourceRegistry,
    config: Optional[DerivationConfig] = None,
) -> DerivationContext:
    """Run a fresh validation pass over a graph"""
    return ValidationPass(registry, config).run(graph)
