"""
Text Builder - Operation IDs, tags, summaries and descriptions

Every value is a pure function of the operation kind, the resource names and
(for actions) the action name.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from aepmeta.schema.models import OperationKind, ResourceMetadata
from .template_engine import TemplateEngine, capitalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationText:
    """Templates for one operation kind"""

    operation_id: str
    summary: str
    description: str


@dataclass(frozen=True)
class RenderedText:
    """Rendered text for one classified operation"""

    operation_id: str
    tag: str
    summary: str
    description: str


# Action IDs start with ":" to mark them as non-standard methods (AEP-136).
OPERATION_TEXT: Dict[OperationKind, OperationText] = {
    OperationKind.READ: OperationText(
        "Get${Singular}",
        "Get ${Singular}",
        "Gets a single ${singular} by its resource name.",
    ),
    OperationKind.LIST: OperationText(
        "List${Plural}",
        "List ${Plural}",
        "Lists ${plural} with support for filtering, pagination, and sorting.",
    ),
    OperationKind.CREATE: OperationText(
        "Create${Singular}",
        "Create ${Singular}",
        "Creates a new ${singular}. An optional `id` query parameter can be "
        "provided to set the resource identifier.",
    ),
    OperationKind.UPDATE: OperationText(
        "Update${Singular}",
        "Update ${Singular}",
        "Updates an existing ${singular} using merge-patch semantics. Only "
        "fields included in the request body are modified.",
    ),
    OperationKind.DELETE: OperationText(
        "Delete${Singular}",
        "Delete ${Singular}",
        "Deletes a ${singular}.",
    ),
    OperationKind.CREATE_OR_REPLACE: OperationText(
        "Apply${Singular}",
        "Apply ${Singular}",
        "Creates or replaces a ${singular}. If the ${singular} already "
        "exists, it is fully replaced.",
    ),
    OperationKind.CUSTOM_ACTION: OperationText(
        ":${Name}${Singular}",
        "${Name} ${Singular}",
        "Performs the ${name} action on a ${singular}.",
    ),
    OperationKind.COLLECTION_ACTION: OperationText(
        ":${Name}${Plural}",
        "${Name} ${Plural}",
        "Performs the ${name} action on the ${plural} collection.",
    ),
}


def tag_name(metadata: ResourceMetadata) -> str:
    """Tag grouping every operation of a resource"""
    return capitalize(metadata.plural)


def tag_description(metadata: ResourceMetadata) -> str:
    return f"Operations for managing {metadata.plural}."


def model_description(metadata: ResourceMetadata) -> str:
    """Fallback description for resource models without authored docs"""
    return f"A {metadata.singular} resource."


class TextBuilder:
    """Renders OPERATION_TEXT for classified operations"""

    def __init__(self, templates: Optional[Dict[OperationKind, OperationText]] = None):
        self.templates = templates or OPERATION_TEXT

    def render(
        self,
        kind: OperationKind,
        metadata: ResourceMetadata,
        action_name: Optional[str] = None,
    ) -> RenderedText:
        """
        Render ID, tag, summary and description for an operation kind

        Args:
            kind: Classified operation kind
            metadata: Resource the operation belongs to
            action_name: Raw action name for custom and collection actions

        Raises:
            KeyError: If no templates exist for the kind
        """
        text = self.templates[kind]
        engine = TemplateEngine({
            "singular": metadata.singular,
            "plural": metadata.plural,
            "name": action_name or "",
        })
        return RenderedText(
            operation_id=engine.evaluate(text.operation_id),
            tag=tag_name(metadata),
            summary=engine.evaluate(text.summary),
            description=engine.evaluate(text.description),
        )
