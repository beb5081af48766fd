"""
Template Engine - Renders naming templates for operation text

Supports:
- Variable substitution (${variable})
- Capitalized variants of every string variable (${Singular} for ${singular})
"""

import logging
import re
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def capitalize(value: str) -> str:
    """Uppercase the first character when it is an ASCII letter, keep the rest"""
    if not value:
        return value
    first = value[0]
    if "a" <= first <= "z":
        first = chr(ord(first) - 32)
    return first + value[1:]


class TemplateEngine:
    """Simple template engine for operation IDs, summaries and descriptions"""

    # Pattern for variable substitution: ${var_name}
    VARIABLE_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        """
        Initialize TemplateEngine

        Args:
            context: Dictionary of variables available for substitution
        """
        self.context: Dict[str, Any] = {}
        self.set_context(context or {})

    def evaluate(self, template: str) -> Any:
        """
        Evaluate a template string

        Args:
            template: Template string (e.g., "Get${Singular}")

        Returns:
            Rendered string, or the input unchanged when it is not a string
        """
        if not isinstance(template, str):
            return template

        def replace_var(match):
            var_name = match.group(1).strip()
            value = self.context.get(var_name)

            if value is None:
                logger.warning(f"Variable not found in context: {var_name}")
                return ""

            return str(value)

        return self.VARIABLE_PATTERN.sub(replace_var, template)

    def set_context(self, context: Dict[str, Any]) -> None:
        """Replace template context, adding capitalized string variants"""
        self.context = {}
        self.update_context(**context)

    def update_context(self, **kwargs) -> None:
        """Update template context with keyword arguments"""
        for name, value in kwargs.items():
            self.context[name] = value
            if isinstance(value, str) and name and name[0].islower():
                self.context.setdefault(capitalize(name), capitalize(value))
