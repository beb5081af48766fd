"""Resource metadata store keyed by model identity."""
import logging
from typing import Dict, Iterable, List, Optional

from aepmeta.errors import RegistrationError
from aepmeta.schema.models import Model, ResourceMetadata

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """
    Holds resource annotations attached to models

    Metadata is set once per model and never changes afterwards. Lookups are
    by identity, so models with equal names never collide.
    """

    def __init__(self):
        self._metadata: Dict[Model, ResourceMetadata] = {}
        self._filter_docs: Dict[Model, str] = {}

    def register(
        self,
        model: Model,
        type: str,
        singular: str,
        plural: str,
    ) -> ResourceMetadata:
        """
        Annotate a model as a resource

        Raises:
            RegistrationError: If the model already carries metadata
        """
        if model in self._metadata:
            raise RegistrationError(
                f"Resource metadata already registered for {model.qualified_name}"
            )
        metadata = ResourceMetadata(type=type, singular=singular, plural=plural)
        self._metadata[model] = metadata
        logger.debug(f"Registered resource {model.qualified_name} as {type}")
        return metadata

    def get_metadata(self, model: Optional[Model]) -> Optional[ResourceMetadata]:
        if model is None:
            return None
        return self._metadata.get(model)

    def is_resource(self, model: Model) -> bool:
        return model in self._metadata

    def parent_of(self, model: Model) -> Optional[Model]:
        return model.parent

    def resources(self, models: Iterable[Model]) -> List[Model]:
        """Filter models down to the ones carrying metadata"""
        return [m for m in models if m in self._metadata]

    def set_collection_filter_doc(self, model: Model, doc: str) -> None:
        """Attach a description for the list operation's filter parameter"""
        self._filter_docs[model] = doc

    def get_collection_filter_doc(self, model: Model) -> Optional[str]:
        return self._filter_docs.get(model)

    def __len__(self) -> int:
        return len(self._metadata)
