"""JSON exporter."""
import json
from pathlib import Path
from datetime import datetime
from typing import Any, Dict

from aepmeta.context import DerivationContext
from aepmeta.schema.models import Service, ServiceGraph


class JsonExporter:
    """Export derived metadata to JSON."""

    def __init__(self, extension_name: str = "x-aep-resource"):
        self.extension_name = extension_name

    def build(self, graph: ServiceGraph, context: DerivationContext) -> Dict[str, Any]:
        """Build the exported document."""
        services = [self.build_service(s, context) for s in graph.services]
        return {
            "metadata": {
                "created_at": datetime.now().isoformat(),
                "total_services": len(services),
                "total_resources": len(context.models),
                "total_operations": len(context.operations),
                "diagnostics": [d.to_dict() for d in context.diagnostics],
            },
            "services": services,
        }

    def build_service(self, service: Service, context: DerivationContext) -> Dict[str, Any]:
        """Build the exported entry for one service."""
        namespace = service.namespace

        models = {}
        for model in namespace.all_models():
            model_meta = context.get_model(model)
            if model_meta is None:
                continue
            entry: Dict[str, Any] = {}
            description = model.doc or model_meta.description
            if description:
                entry["description"] = description
            entry[self.extension_name] = model_meta.extension
            models[model.qualified_name] = entry

        operations = {}
        all_operations = [
            op for interface in namespace.all_interfaces() for op in interface.operations
        ] + namespace.all_operations()
        for operation in all_operations:
            op_meta = context.get_operation(operation)
            if op_meta is None:
                continue
            entry = {"examples": [e.to_dict() for e in op_meta.examples]}
            if op_meta.operation_id:
                entry["operationId"] = op_meta.operation_id
            if op_meta.tag:
                entry["tags"] = [op_meta.tag]
            summary = context.effective_summary(operation)
            if summary:
                entry["summary"] = summary
            if op_meta.description:
                entry["description"] = op_meta.description
            operations[operation.qualified_name] = entry

        field_examples = {}
        parameter_docs = {}
        for model in namespace.all_models():
            for model_field in model.fields:
                examples = context.get_field_examples(model_field)
                if examples:
                    field_examples[f"{model.qualified_name}.{model_field.name}"] = examples
        for operation in all_operations:
            for parameter in operation.parameters:
                doc = context.parameter_docs.get(parameter)
                if doc:
                    parameter_docs[f"{operation.qualified_name}.{parameter.name}"] = doc

        return {
            "title": service.title,
            "tags": [
                {"name": name, "description": tag.description}
                for name, tag in context.get_tags(service).items()
            ],
            "models": {k: models[k] for k in sorted(models)},
            "operations": {k: operations[k] for k in sorted(operations)},
            "fieldExamples": {k: field_examples[k] for k in sorted(field_examples)},
            "parameterDocs": {k: parameter_docs[k] for k in sorted(parameter_docs)},
        }

    def export(
        self,
        output_file: Path,
        graph: ServiceGraph,
        context: DerivationContext,
    ) -> None:
        """Export to JSON file."""
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(self.build(graph, context), f, indent=2, default=str)
