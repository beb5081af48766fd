"""
Graph Loader - Reads service graph documents from disk or over HTTP.

Features:
- Local JSON files
- http(s) URLs fetched with requests, optional Bearer token
- Consistent GraphLoadError for every failure
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests

from aepmeta.errors import GraphLoadError

logger = logging.getLogger(__name__)


class GraphDocumentLoader:
    """
    Loads a service graph document

    Usage:
    ```python
    loader = GraphDocumentLoader("https://example.com/library.graph.json", api_key="...")
    document = loader.load()
    print(f"Found {len(document['services'])} services")
    ```
    """

    def __init__(
        self,
        source: Union[str, Path],
        api_key: Optional[str] = None,
        timeout: int = 30,
    ):
        """
        Initialize GraphDocumentLoader

        Args:
            source: File path or http(s) URL
            api_key: Bearer token sent with HTTP requests
            timeout: HTTP request timeout in seconds
        """
        self.source = str(source)
        self.api_key = api_key
        self.timeout = timeout

        self.session = requests.Session()
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    def load(self) -> Dict[str, Any]:
        """
        Load and decode the document

        Returns:
            Decoded JSON document

        Raises:
            GraphLoadError: If the document cannot be read or is not a JSON object
        """
        if self.is_remote:
            document = self._fetch_from_url()
        else:
            document = self._read_file()

        if not isinstance(document, dict):
            raise GraphLoadError(f"Service graph document must be a JSON object: {self.source}")

        logger.info(f"Loaded service graph document from {self.source}")
        return document

    def _fetch_from_url(self) -> Any:
        try:
            logger.debug(f"Fetching service graph: {self.source}")
            response = self.session.get(self.source, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        except requests.exceptions.RequestException as e:
            raise GraphLoadError(f"Could not fetch {self.source}: {e}") from e
        except ValueError as e:
            raise GraphLoadError(f"Invalid JSON from {self.source}: {e}") from e

    def _read_file(self) -> Any:
        path = Path(self.source)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)

        except OSError as e:
            raise GraphLoadError(f"Could not read {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise GraphLoadError(f"Invalid JSON in {path}: {e}") from e
