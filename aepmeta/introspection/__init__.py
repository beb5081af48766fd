"""
Introspection Module - Service graph documents

Loads a JSON dump of an already-typed service graph and rebuilds the object
graph the validation pass works on:
- Local files or http(s) URLs
- Nested namespaces and forward references
- Resource annotations registered into a ResourceRegistry
"""

from .graph_loader import GraphDocumentLoader
from .graph_analyzer import GraphAnalyzer

__all__ = [
    "GraphDocumentLoader",
    "GraphAnalyzer",
]
