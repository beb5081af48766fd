"""Build hierarchical resource patterns by walking parent chains."""
import logging
import re
from typing import List, Optional, Tuple

from aepmeta.errors import ResourceCycleError
from aepmeta.schema.models import Model, ResourceMetadata
from aepmeta.schema.registry import ResourceRegistry
from aepmeta.validator.diagnostics import Diagnostic, Severity

logger = logging.getLogger(__name__)

# Placeholder in a pattern: {singular}
PARAM_PATTERN = re.compile(r"\{([^}]+)\}")


class PatternBuilder:
    """Computes patterns like ``publishers/{publisher}/books/{book}``"""

    def __init__(self, registry: ResourceRegistry, max_depth: int = 32):
        """
        Initialize PatternBuilder

        Args:
            registry: Resource metadata store
            max_depth: Longest parent chain accepted before giving up
        """
        self.registry = registry
        self.max_depth = max_depth

    def resource_chain(
        self,
        model: Model,
        metadata: Optional[ResourceMetadata] = None,
    ) -> List[Tuple[Model, ResourceMetadata]]:
        """
        Return (model, metadata) pairs from the root ancestor down to the model

        The walk stops at the first ancestor without resource metadata.

        Raises:
            ResourceCycleError: If the chain revisits a model or is too deep
        """
        metadata = metadata or self.registry.get_metadata(model)
        if metadata is None:
            return []

        chain = [(model, metadata)]
        seen = {model}
        current = model
        while True:
            parent = self.registry.parent_of(current)
            parent_meta = self.registry.get_metadata(parent)
            if parent is None or parent_meta is None:
                break
            if parent in seen or len(chain) >= self.max_depth:
                raise ResourceCycleError([
                    Diagnostic(
                        code="aep-resource-cycle",
                        severity=Severity.ERROR,
                        message=(
                            f"Parent chain of {model.qualified_name} loops or "
                            f"exceeds {self.max_depth} levels"
                        ),
                        target=model.qualified_name,
                    )
                ])
            chain.append((parent, parent_meta))
            seen.add(parent)
            current = parent

        chain.reverse()
        return chain

    def build_pattern(
        self,
        model: Model,
        metadata: Optional[ResourceMetadata] = None,
    ) -> str:
        """Pattern for a resource model, ancestors first"""
        chain = self.resource_chain(model, metadata)
        return "/".join(f"{meta.plural}/{{{meta.singular}}}" for _, meta in chain)

    @staticmethod
    def example_path(pattern: str) -> str:
        """Replace each {param} with my-param"""
        return PARAM_PATTERN.sub(lambda match: f"my-{match.group(1)}", pattern)
