"""
Builder Module - Operation text and example payloads

Builds everything attached to a classified operation:
- Operation IDs, tags, summaries and descriptions from per-kind templates
- Field-level example values
- Request/response examples per operation kind
- Standard error examples
"""

from .payload_builder import PayloadBuilder, ERROR_STATUSES
from .field_builder import FieldBuilder, generate_example_value
from .template_engine import TemplateEngine, capitalize
from .text_builder import TextBuilder, OPERATION_TEXT

__all__ = [
    "PayloadBuilder",
    "ERROR_STATUSES",
    "FieldBuilder",
    "generate_example_value",
    "TemplateEngine",
    "capitalize",
    "TextBuilder",
    "OPERATION_TEXT",
]
